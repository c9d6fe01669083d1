"""Request-scoped context using contextvars.

Holds the request id for log records. Set by RequestIDMiddleware; read by
RequestIdLogFilter so every log line emitted while handling a request
carries the same id.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Bind request_id to the current task. Returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _request_id.get()
