"""
AWS Lambda handler for the simulate endpoint.

PURPOSE:
- Entry point for Lambda behind API Gateway (proxy integration).
- Parses the body, runs the pipeline, and maps each error kind to a status code
  with a {"error": str} body.

CONTEXT:
- Logs carry request_id and correlation_id so a request can be followed in CloudWatch.
- Status mapping: validation -> 400; configuration, model and parse failures -> 500.
"""

from __future__ import annotations
import json
import time
import traceback
import uuid
from typing import Any, Dict, Optional

from jsonschema import ValidationError

from careersim.errors import CareerSimError, InputValidationError
from careersim.logging_setup import bind_request, configure_logging
from careersim.observability import init_observability
from careersim.pipeline import run_pipeline
from careersim.sim_io import error_to_string


# Configure a structured logger once; emits JSON key/value logs.
log = configure_logging()
init_observability()


def _cors_headers(origin: Optional[str] = None) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def _response(body: Optional[Dict[str, Any]], status_code: int = 200, origin: Optional[str] = None) -> Dict[str, Any]:
    """
    Wrap a Python dict into an API Gateway compatible response.

    returns:
    - dict – {"statusCode": int, "headers": {...}, "body": "<json-string>"}; body is "" for None.
    """
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **_cors_headers(origin)},
        "body": json.dumps(body) if body is not None else "",
    }


def _header(event: Dict[str, Any], name: str) -> Optional[str]:
    # API Gateway preserves client casing for REST APIs and lower-cases for HTTP APIs.
    headers = event.get("headers") or {}
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod") or ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "POST").upper()


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Lambda entry point.

    flow:
    1) Bind request/correlation IDs for traceability.
    2) Answer CORS preflight (OPTIONS) with 204.
    3) Parse the JSON body; a body that does not parse is a validation error.
    4) Run the pipeline and map errors to 400/500.

    returns:
    - dict – API Gateway compatible response with JSON body.
    """
    t0 = time.time()
    event = event if isinstance(event, dict) else {}

    request_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
    correlation_id = _header(event, "x-correlation-id") or str(uuid.uuid4())
    origin = _header(event, "origin")
    bind_request(request_id, correlation_id)
    rlog = log.bind(request_id=request_id, correlation_id=correlation_id)

    method = _method(event)
    rlog.info("request.received", method=method)
    if method == "OPTIONS":
        return _response(None, 204, origin)

    # Proxy events carry the payload in "body"; direct invocations are the payload.
    body: Any = event
    try:
        if "body" in event:
            body = json.loads(event["body"]) if isinstance(event["body"], str) else event["body"]
    except ValueError:
        rlog.warning("request.body_parse_failed")
        return _response({"error": "Request body must be a JSON object"}, 400, origin)

    try:
        result = run_pipeline(body)
    except InputValidationError as e:
        rlog.info("response.validation_failed", error=str(e))
        return _response({"error": str(e)}, e.status_code, origin)
    except CareerSimError as e:
        latency_ms = round((time.time() - t0) * 1000, 1)
        rlog.error("response.error", error_kind=type(e).__name__, error=str(e), latency_ms=latency_ms)
        return _response({"error": str(e)}, e.status_code, origin)
    except ValidationError as e:
        # Normalised input or sanitized output broke its schema; a bug here, not in the request.
        rlog.error("response.schema_invalid", error=error_to_string(e))
        return _response({"error": f"Simulation failed: schema violation: {error_to_string(e)}"}, 500, origin)
    except Exception as e:
        latency_ms = round((time.time() - t0) * 1000, 1)
        rlog.error(
            "response.error",
            error=error_to_string(e),
            traceback=traceback.format_exc(limit=2),
            latency_ms=latency_ms,
        )
        return _response({"error": "Simulation failed"}, 500, origin)

    latency_ms = round((time.time() - t0) * 1000, 1)
    rlog.info("response.success", latency_ms=latency_ms)
    return _response(result, 200, origin)
