"""Text rendering for the console backend.

The output is a compatibility contract, so keep it byte-stable:

    📈 Checkout Started
      (key: "currency", value: EUR)
      (key: "items", value: 3)

Parameters are always listed in sorted key order so that logs can be
diffed between runs.
"""

from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional

from beacon.core.events import LoggableEvent, Severity

ANALYTICS_GLYPH = Severity.ANALYTIC.glyph
NIL = "nil"


def render_value(value: Any) -> str:
    """Render a parameter value for the console.

    Never raises: a value whose rendering fails becomes a placeholder.
    """
    try:
        return _render(value, nested=False)
    except Exception:
        return f"<unrenderable: {type(value).__name__}>"


def _render(value: Any, nested: bool) -> str:
    if value is None:
        return NIL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _render(value.value, nested)
    if isinstance(value, str):
        return f'"{value}"' if nested else value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        if not value:
            return "[:]"
        items = ", ".join(
            f'"{key}": {_render(value[key], nested=True)}' for key in sorted(value, key=str)
        )
        return f"[{items}]"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render(item, nested=True) for item in value) + "]"
    return str(value)


def format_parameter_lines(parameters: Optional[Mapping[str, Any]]) -> str:
    """One ``(key: ..., value: ...)`` line per parameter, sorted by key."""
    if not parameters:
        return ""
    return "".join(
        f'\n  (key: "{key}", value: {render_value(parameters[key])})'
        for key in sorted(parameters, key=str)
    )


def format_event(event: LoggableEvent, print_parameters: bool = True) -> str:
    line = f"{event.severity.glyph} {event.event_name}"
    if print_parameters:
        line += format_parameter_lines(event.parameters)
    return line


def format_identify_user(
    user_id: str,
    name: Optional[str],
    email: Optional[str],
    print_user_details: bool = True,
) -> str:
    text = f"{ANALYTICS_GLYPH} Identify User\n  userId: {user_id}"
    if print_user_details:
        text += f"\n  name: {name if name is not None else NIL}"
        text += f"\n  email: {email if email is not None else NIL}"
    return text


def format_user_properties(
    properties: Mapping[str, Any],
    high_priority: bool,
    print_properties: bool = True,
    print_priority: bool = True,
) -> str:
    text = f"{ANALYTICS_GLYPH} Add User Properties"
    if print_priority:
        text += f" (isHighPriority: {render_value(high_priority)})"
    if print_properties:
        text += format_parameter_lines(properties)
    return text


def format_delete_user_profile() -> str:
    return f"{ANALYTICS_GLYPH} Delete User Profile"
