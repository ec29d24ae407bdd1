# PURPOSE: Error types raised along the simulate flow.
# CONTEXT: The Lambda handler maps each class to an HTTP status; the message of
#          every error is safe to return to the caller as-is.

from __future__ import annotations


class CareerSimError(Exception):
    """Base class for all errors surfaced by the simulate flow."""

    status_code = 500


class InputValidationError(CareerSimError):
    """The request body failed validation. Caller-caused; resubmit a corrected request."""

    status_code = 400


class ConfigurationError(CareerSimError):
    """Process configuration is incomplete (e.g. the model credential is missing)."""


class SimulationError(CareerSimError):
    """The external model call failed (transport, service or unknown error)."""


class ModelResponseError(SimulationError):
    """The model replied, but the reply was not a JSON object."""
