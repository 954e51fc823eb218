"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Storefront errors (400/403/404/409/503): {"error": "msg", ...extra fields}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message from an API error response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body.get("detail"), list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if isinstance(body.get("detail"), str):
        return body["detail"]

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {v}" for k, v in error.items())
        if body.get("retryable"):
            return f"{error} (retryable)"
        return str(error)

    return str(body)[:300]


def is_retryable(response: Response) -> bool:
    """True when the API reported a rolled-back, retryable failure."""
    if response.status_code != 503:
        return False
    try:
        return bool(response.json().get("retryable"))
    except ValueError:
        return False
