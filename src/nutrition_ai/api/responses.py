"""Uniform JSON envelope for every endpoint."""

from fastapi.responses import JSONResponse

from nutrition_ai.serialization import to_document


def ok(data: object = None, message: str | None = None) -> dict[str, object]:
    """Return a success envelope with camelCase data."""
    body: dict[str, object] = {"success": True}
    if data is not None:
        body["data"] = to_document(data)
    if message is not None:
        body["message"] = message
    return body


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error}
    )
