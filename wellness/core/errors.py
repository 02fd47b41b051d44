"""Error taxonomy shared by services and endpoints.

Services raise these; ``wellness.main`` renders every one of them as
``{"error": ..., "detail": ...}`` with the matching status code.
"""

from typing import Optional


class WellnessError(Exception):
    status_code = 500
    default_error = "Internal server error"

    def __init__(self, error: Optional[str] = None, detail: Optional[str] = None):
        self.error = error or self.default_error
        self.detail = detail
        super().__init__(self.error)

    def to_dict(self, include_detail: bool = True) -> dict:
        body = {"error": self.error}
        if include_detail and self.detail:
            body["detail"] = self.detail
        return body


class InvalidInput(WellnessError):
    status_code = 400
    default_error = "Invalid input"


class UnsupportedMediaType(InvalidInput):
    status_code = 415
    default_error = "Content-Type must be application/json"


class Unauthorized(WellnessError):
    status_code = 401
    default_error = "Unauthorized"


class Forbidden(WellnessError):
    status_code = 403
    default_error = "Forbidden"


class NotFound(WellnessError):
    status_code = 404
    default_error = "Not found"


class Conflict(WellnessError):
    status_code = 409
    default_error = "Conflict"


class InternalFailure(WellnessError):
    status_code = 500
    default_error = "Internal server error"
