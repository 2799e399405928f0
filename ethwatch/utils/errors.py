from __future__ import annotations

from fastapi.responses import JSONResponse


class ChainClientError(Exception):
    """Base class for failures talking to the chain node."""


class TransportError(ChainClientError):
    """The HTTP call to the node failed (connection, timeout, non-2xx)."""


class DecodeError(ChainClientError):
    """The response body is not JSON or does not have the expected shape."""


class FormatError(ChainClientError):
    """A value is present but not in the expected numeric encoding."""


def error_response(
    status_code: int, message: str, detail: dict | None = None
) -> JSONResponse:
    content: dict = {"error": message}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)
