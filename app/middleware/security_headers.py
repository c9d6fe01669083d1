"""Security headers middleware.

Adds baseline security headers to every response. Portal responses carry
session cookies and per-visitor access decisions, so paths under the
portal prefix are also marked Cache-Control: no-store. Raw ASGI.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

PORTAL_PATH_PREFIX = "/api/v1/portal/"
NO_STORE = (b"cache-control", b"no-store")


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    no_store_prefix: str = PORTAL_PATH_PREFIX,
) -> Callable:
    """Append security headers the handler did not already set."""
    extra = [
        (name.lower().encode(), value.encode())
        for name, value in (headers or DEFAULT_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        wanted = list(extra)
        if scope.get("path", "").startswith(no_store_prefix):
            wanted.append(NO_STORE)

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(h for h in wanted if h[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
