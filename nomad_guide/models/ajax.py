from typing import Any

from pydantic import BaseModel


class AjaxRequest(BaseModel):
    action: str
    nonce: str = ""


class AjaxResponse(BaseModel):
    success: bool
    data: dict[str, Any] = {}


def send_success(data: dict[str, Any]) -> AjaxResponse:
    return AjaxResponse(success=True, data=data)


def send_error(message: str) -> AjaxResponse:
    return AjaxResponse(success=False, data={"message": message})
