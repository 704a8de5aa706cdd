from typing import Any, Dict, Optional

class AppException(Exception):
    """
    Base class for all application exceptions.
    Ensures that all raised errors have a consistent structure.
    """
    def __init__(
        self,
        code: int = 400,
        slug: str = "bad_request",
        msg: str = "Bad Request",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.slug = slug
        self.msg = msg
        self.details = details or {}
        super().__init__(self.msg)

class ValidationException(AppException):
    def __init__(self, msg: str = "Validation failed", details: dict = None):
        super().__init__(
            code=422,
            slug="validation_error",
            msg=msg,
            details=details
        )

class UpstreamServiceError(AppException):
    """RxNav (or another outbound dependency) failed or answered with garbage"""
    def __init__(self, msg: str = "Upstream service error", details: dict = None):
        super().__init__(
            code=502,
            slug="upstream_service_error",
            msg=msg,
            details=details
        )
