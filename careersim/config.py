# PURPOSE: Process configuration read from the environment.
# CONTEXT: Values are read on each call rather than at import time so tests and
#          long-lived Lambda containers both see the current environment.

from __future__ import annotations
import os
from typing import Optional

# Bedrock API key; boto3 picks it up from this variable for bearer-token auth.
CREDENTIAL_ENV = "AWS_BEARER_TOKEN_BEDROCK"

DEFAULT_REGION = "eu-west-2"
# Example model ids: deepseek.v3-v1:0, qwen.qwen3-coder-30b-a3b-v1:0
DEFAULT_MODEL_ID = "deepseek.v3-v1:0"


def credential() -> Optional[str]:
    """Return the model credential, or None when it is unset or blank."""
    value = os.getenv(CREDENTIAL_ENV, "").strip()
    return value or None


def region() -> str:
    return os.getenv("AWS_REGION", DEFAULT_REGION)


def model_id() -> str:
    return os.getenv("MODEL_ID", DEFAULT_MODEL_ID)


def inference_config() -> dict:
    """
    Optional Converse inferenceConfig built from MAX_TOKENS / TEMPERATURE.

    returns:
    - dict – only the keys that are set, e.g. {"maxTokens": 2048}; {} when neither is.
    """
    cfg = {}
    if os.getenv("MAX_TOKENS"):
        cfg["maxTokens"] = int(os.environ["MAX_TOKENS"])
    if os.getenv("TEMPERATURE"):
        cfg["temperature"] = float(os.environ["TEMPERATURE"])
    return cfg
