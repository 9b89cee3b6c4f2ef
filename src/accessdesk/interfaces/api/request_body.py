"""Request body parsing for API resources."""

from typing import Any

import falcon.asgi

from accessdesk.domain.exceptions import ValidationError
from accessdesk.domain.value_objects import RoleLevel


async def read_object(req: falcon.asgi.Request) -> dict[str, Any]:
    """JSON object body; an empty body reads as {}."""
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def optional_str(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def required_name(body: dict[str, Any]) -> str:
    name = optional_str(body, "name")
    if name is None or not name.strip():
        raise ValidationError("name is required")
    return name


def optional_level(body: dict[str, Any]) -> int | None:
    level = body.get("level")
    if level is None:
        return None
    if isinstance(level, bool) or not isinstance(level, int) or level not in set(RoleLevel):
        raise ValidationError("level must be an integer from 1 to 5")
    return level


def required_bool(body: dict[str, Any], key: str) -> bool:
    value = body.get(key)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean")
    return value
