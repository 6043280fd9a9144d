from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    errors: Optional[Any] = None,
) -> JSONResponse:
    """
    Envelope shared by every endpoint:

        {"status_code", "status", "message", "data"[, "errors"]}

    ``status`` is "success" below 400 and "error" otherwise. ``data`` may be a
    pydantic model or any JSON-encodable value; None becomes an empty object.
    ``errors`` is only included when given.
    """
    content = {
        "status_code": status_code,
        "status": "success" if status_code < 400 else "error",
        "message": message,
        "data": jsonable_encoder(data) if data is not None else {},
    }
    if errors is not None:
        content["errors"] = jsonable_encoder(errors)

    return JSONResponse(status_code=status_code, content=content)
