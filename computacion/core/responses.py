from typing import Any

from fastapi.responses import JSONResponse

_OMIT = object()


class EnvelopeResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def envelope(success: bool, msg: str, response: Any = _OMIT) -> dict:
    body = {"success": success, "msg": msg}
    if response is not _OMIT:
        body["response"] = response
    return body


def ok(msg: str, response: Any = _OMIT, status_code: int = 200) -> EnvelopeResponse:
    return EnvelopeResponse(envelope(True, msg, response), status_code=status_code)


def fail(msg: str, status_code: int) -> EnvelopeResponse:
    return EnvelopeResponse(envelope(False, msg), status_code=status_code)
