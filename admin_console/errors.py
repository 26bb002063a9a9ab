class ConsoleError(Exception):
    """Base for every failure scoped to a single console operation."""


class TransportError(ConsoleError):
    """Backend could not be reached (connection refused, timeout, ...)."""


class ApiError(ConsoleError):
    def __init__(self, status: int, message: str | None = None):
        self.status = status
        self.message = message
        super().__init__(message or f"HTTP {status}")


class ResponseShapeError(ConsoleError):
    """Backend answered 2xx but the body is not what the adapter expects."""


class ValidationError(ConsoleError):
    """Rejected before any request was issued."""


def user_message(exc: Exception, fallback: str) -> str:
    # server-provided text wins, otherwise a generic message
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    if isinstance(exc, ValidationError):
        return str(exc)
    return fallback
