from __future__ import annotations


DEFAULT_ERROR_MESSAGE = "Internal server error"


class RetailOpsError(Exception):
    status_code = 500


class InvalidEmailError(RetailOpsError):
    status_code = 400

    def __init__(self, message: str = "Email is required"):
        super().__init__(message)


class OrderRetrievalError(RetailOpsError):
    status_code = 500


def error_message(exc: BaseException | None) -> str:
    """Best-effort human readable message for an exception."""
    if isinstance(exc, BaseException):
        msg = str(exc).strip()
        if msg:
            return msg
    return DEFAULT_ERROR_MESSAGE
