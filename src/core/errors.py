"""
Error taxonomy for the quiz API.

Every per-request failure is raised as one of the QuizApiError subclasses
below and converted to a fixed JSON body at the router boundary. The `code`
tag travels to the client in the X-Error-Code header so callers can tell a
database outage from a malformed model answer without parsing log output.
"""
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

ERROR_CODE_HEADER = "X-Error-Code"


class QuizApiError(Exception):
    """Base class for all errors raised by the quiz API."""
    code = "internal_error"


class ConfigurationError(QuizApiError):
    """A required external credential is missing. Fatal at startup."""
    code = "configuration_error"


class UpstreamDataError(QuizApiError):
    """The relational store is unreachable or a query failed."""
    code = "upstream_data_error"


class ModelInvocationError(QuizApiError):
    """The generative model call failed, timed out or returned no text."""
    code = "model_invocation_error"


class ModelOutputError(QuizApiError):
    """The model answered, but the text is not a valid evaluation result."""
    code = "model_output_error"

    def __init__(self, message: str, kind: str = "parse", raw_text: Optional[str] = None):
        super().__init__(message)
        self.kind = kind # "parse" or "schema"
        self.raw_text = raw_text


class RequestValidationFailed(QuizApiError):
    """The client sent a malformed or incomplete request body."""
    code = "validation_error"


def error_response(
    status_code: int,
    message: str,
    error: Optional[BaseException] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Builds the `{"error": message}` body used by every failing endpoint."""
    code = error.code if isinstance(error, QuizApiError) else QuizApiError.code
    content: Dict[str, Any] = {"error": message}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers={ERROR_CODE_HEADER: code})
