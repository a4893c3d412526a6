"""
errors.py — Error taxonomy for the form service.

Raised inside registro.forms, translated to JSON responses at the request
boundary (registro.api.routes). Every class carries the HTTP status it maps to.

    FormServiceError
    ├── ValidationError         400  missing required / conditional fields
    ├── TemplateError           500
    │   ├── TemplateNotFoundError
    │   └── TemplateParseError
    └── RenderError             500  drawing, merging or serializing failed
"""


class FormServiceError(Exception):
    """Base class for every error the form service raises on purpose."""
    status_code = 500
    public_message = "Error interno del servidor"

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_payload(self, include_detail: bool = False) -> dict:
        payload = {"success": False, "message": self.public_message}
        if include_detail:
            payload["error"] = self.message
        return payload


class ValidationError(FormServiceError):
    """Client input is incomplete. The message is safe to show to users."""
    status_code = 400

    def __init__(self, message: str = "", missing_fields=None):
        self.missing_fields = list(missing_fields or [])
        if not message and self.missing_fields:
            message = "Faltan campos requeridos: " + ", ".join(self.missing_fields)
        super().__init__(message or "Solicitud inválida")

    def to_payload(self, include_detail: bool = False) -> dict:
        payload = {"success": False, "message": self.message}
        if self.missing_fields:
            payload["missingFields"] = self.missing_fields
        return payload


class TemplateError(FormServiceError):
    """The PDF template on disk is unusable (server misconfiguration)."""

    def __init__(self, message: str = "", path=None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class TemplateNotFoundError(TemplateError):
    pass


class TemplateParseError(TemplateError):
    pass


class RenderError(FormServiceError):
    """Unexpected failure while drawing the overlay or writing the output."""
