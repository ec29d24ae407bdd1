# PURPOSE: Default SimulationModel backed by Amazon Bedrock's Converse API.
# CONTEXT: One system block plus one user turn per simulation. Retries are turned
#          off so a failed call surfaces to the caller instead of being absorbed.

from __future__ import annotations
from typing import Any, Dict

import boto3
from botocore.config import Config

from careersim import config
from careersim.errors import ConfigurationError
from careersim.model_interface.simulation_model import SimulationModel
from careersim.sim_io import make_user_message


class BedrockModel(SimulationModel):
    """
    Bedrock Converse client.

    raises (on construction):
    - ConfigurationError – when the credential is not set. No client is created,
      so nothing touches the network.
    """

    def __init__(self, model_id: str | None = None, client: Any = None):
        if not config.credential():
            raise ConfigurationError(f"{config.CREDENTIAL_ENV} is not set")
        self.model_id = model_id or config.model_id()
        self.client = client or boto3.client(
            "bedrock-runtime",
            region_name=config.region(),
            config=Config(retries={"total_max_attempts": 1, "mode": "standard"}),
        )

    def complete(self, system: str, prompt: str) -> str:
        """
        Send a single Converse request and return the reply text.

        returns:
        - str – all text blocks of the first output message, concatenated.
        """
        request: Dict[str, Any] = {
            "modelId": self.model_id,
            "system": [{"text": system}],
            "messages": [make_user_message(prompt)],
        }
        inference = config.inference_config()
        if inference:
            request["inferenceConfig"] = inference

        resp = self.client.converse(**request)

        # Shape: resp["output"]["message"]["content"] is a list of blocks.
        parts = resp.get("output", {}).get("message", {}).get("content", [])
        return "".join(p.get("text", "") for p in parts)
