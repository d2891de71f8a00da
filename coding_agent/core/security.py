"""Origin allow-list checks and security response headers."""

from fastapi import Request, Response

# Conservative defaults for a JSON-only API
SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def client_address(request: Request) -> str:
    return request.client.host if request.client else ""


def is_origin_allowed(request: Request, allowed_origins: list[str]) -> bool:
    """
    Check the caller against the origin allow-list.

    The Origin header is checked when present, otherwise the client address.
    The client address is always accepted if it is listed, so callers without
    a browser origin can be admitted by IP. An empty list allows everyone.
    """
    if not allowed_origins:
        return True
    address = client_address(request)
    origin = request.headers.get("origin") or address
    return origin in allowed_origins or address in allowed_origins


def apply_security_headers(response: Response) -> Response:
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
