"""JSON envelope shared by every route: ``{success, data?, message?, ...}``."""

from typing import Any, Optional

from pydantic import BaseModel


def dump(value: Any) -> Any:
    """Serialize schemas with their camelCase aliases."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, (list, tuple)):
        return [dump(item) for item in value]
    return value


def ok(data: Any = None, message: Optional[str] = None, **extra: Any) -> dict:
    body = {"success": True}
    if data is not None:
        body["data"] = dump(data)
    if message is not None:
        body["message"] = message
    for key, value in extra.items():
        body[key] = dump(value)
    return body
