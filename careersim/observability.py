"""
Optional AWS X-Ray tracing for the model call.

PURPOSE:
- With USE_XRAY=1, patch botocore so the Bedrock Converse request appears as a
  downstream node, and wrap the call in an annotated subsegment (model id, outcome).
- With tracing off or the SDK absent, everything here is a no-op.
"""
from __future__ import annotations
import os


def _enabled() -> bool:
    return os.getenv("USE_XRAY", "0") == "1"


def init_observability():
    """
    Configure the X-Ray recorder once per container.

    returns:
    - xray_recorder when tracing is enabled and the SDK is importable, else None.
    """
    if not _enabled():
        return None
    try:
        from aws_xray_sdk.core import patch, xray_recorder
    except ImportError:
        return None
    xray_recorder.configure(service=os.getenv("XRAY_SERVICE_NAME", "CareerSim"), context_missing="LOG_ERROR")
    patch(("botocore",))
    return xray_recorder


class xray_segment:
    """
    Subsegment around a block, annotated for search in the X-Ray console.

    usage:
    >>> with xray_segment("model.complete", model="StubModel"):
    >>>     raw = model.complete(system, prompt)

    The block's own exceptions always propagate; an `outcome` annotation records
    "ok" or the exception type.
    """

    def __init__(self, name: str, **annotations):
        self.name = name
        self.annotations = annotations
        self.sub = None

    def __enter__(self):
        if not _enabled():
            return self
        try:
            from aws_xray_sdk.core import xray_recorder
        except ImportError:
            return self
        self.sub = xray_recorder.begin_subsegment(self.name)
        if self.sub is not None:
            for key, value in self.annotations.items():
                self.sub.put_annotation(key, str(value))
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.sub is None:
            return False
        from aws_xray_sdk.core import xray_recorder
        self.sub.put_annotation("outcome", "ok" if exc is None else exc_type.__name__)
        xray_recorder.end_subsegment()
        return False
