from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Dict[str, Any]] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Single source of truth for ALL API responses.

    Sets status = "success" if < 400 else "error". The keys of ``data`` are
    merged into the top level of the body, so clients read ``token`` or
    ``notes`` directly next to ``message``.
    """
    status_str = "success" if status_code < 400 else "error"
    content = {
        "status_code": status_code,
        "status": status_str,
        "message": message,
    }
    if data:
        content.update(jsonable_encoder(data))

    return JSONResponse(status_code=status_code, content=content, headers=headers)
