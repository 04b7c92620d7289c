"""
Error taxonomy for the SAR lookup endpoint.

Only input validation, the credentials check and the catalog stage may
terminate a request early. Each error carries the HTTP status and the
client-facing message; the app-level handler in ``main.py`` renders it as
``{"error": message}``.

Enrichment (Imagga) and LLM failures have no entry here; those calls
degrade to default values and never raise past their client.
"""

from typing import Dict


class SarLookupError(Exception):
    """Base exception for errors surfaced to the caller."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str = "", *, status_code: int = 0) -> None:
        self.message = message or self.default_message
        self.status_code = status_code or self.status_code
        super().__init__(self.message)

    def to_error_dict(self) -> Dict[str, str]:
        return {"error": self.message}


class ValidationError(SarLookupError):
    """Required request input is missing."""

    status_code = 400
    default_message = "Latitude and Longitude are required."


class ConfigError(SarLookupError):
    """Required server credentials are not configured."""

    status_code = 500
    default_message = "Server configuration error: Imagga credentials missing."


class NotFoundError(SarLookupError):
    """The catalog has nothing usable for the requested point."""

    status_code = 404
    default_message = "No SAR data found for this location."


class UpstreamError(SarLookupError):
    """The catalog call itself failed."""

    status_code = 500
    default_message = "Failed to process SAR data."


NO_PREVIEWS = "SAR data found, but no preview images are available."
