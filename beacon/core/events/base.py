"""Event value type passed from callers through the dispatcher to backends.

``Event`` is a validated, frozen Pydantic model. ``LoggableEvent`` is the
structural protocol the dispatcher and backends actually depend on, so
callers can report their own event types (e.g. an enum of screen events)
without converting them first.
"""

from datetime import date, datetime
from enum import Enum
from typing import (
    Any,
    Dict,
    FrozenSet,
    List,
    Mapping,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from beacon.core.events.enums import Severity

# Closed union of values a parameter map may hold.
ParameterValue = Union[
    str,
    int,
    float,
    bool,
    None,
    datetime,
    date,
    UUID,
    Enum,
    List["ParameterValue"],
    Dict[str, "ParameterValue"],
]

Parameters = Mapping[str, ParameterValue]

_SCALARS = (str, int, float, bool, datetime, date, UUID, Enum)


def unsupported_placeholder(value: Any) -> str:
    """Placeholder text for a value outside the parameter union."""
    return f"<unsupported: {type(value).__name__}>"


def recursive_placeholder(value: Any) -> str:
    """Placeholder text for a container that contains itself."""
    return f"<recursive: {type(value).__name__}>"


def normalize_value(value: Any, _ancestors: FrozenSet[int] = frozenset()) -> ParameterValue:
    """Coerce an arbitrary value into the closed parameter union.

    Tuples become lists and mapping keys become strings. Anything else
    outside the union is replaced by a placeholder string so that event
    construction never fails. A container that refers back to one of its
    own ancestors is replaced by a ``<recursive: T>`` placeholder.
    """
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in _ancestors:
            return recursive_placeholder(value)
        ancestors = _ancestors | {id(value)}
        if isinstance(value, Mapping):
            return _normalize_mapping(value, ancestors)
        return [normalize_value(item, ancestors) for item in value]
    return unsupported_placeholder(value)


def normalize_parameters(parameters: Mapping[Any, Any]) -> Dict[str, ParameterValue]:
    """Return a fresh ``str``-keyed copy of ``parameters`` inside the union.

    The copy is deep, so later mutation of nested containers by the
    caller does not show through.
    """
    return _normalize_mapping(parameters, frozenset({id(parameters)}))


def _normalize_mapping(
    mapping: Mapping[Any, Any], ancestors: FrozenSet[int]
) -> Dict[str, ParameterValue]:
    return {str(key): normalize_value(value, ancestors) for key, value in mapping.items()}


@runtime_checkable
class LoggableEvent(Protocol):
    """Anything that can be reported through the dispatcher."""

    @property
    def event_name(self) -> str:
        """Human-readable event identifier (e.g. 'Checkout Started')."""
        ...

    @property
    def parameters(self) -> Optional[Parameters]:
        """Optional key/value payload."""
        ...

    @property
    def severity(self) -> Severity:
        """How much this event should worry a developer."""
        ...


class Event(BaseModel):
    """Immutable event built at the call site.

    Usage:
        Event(event_name="Checkout Started", parameters={"items": 3})
        Event(event_name="Cache Miss", severity=Severity.INFO)
    """

    model_config = ConfigDict(frozen=True)

    event_name: str
    parameters: Optional[Dict[str, Any]] = None
    severity: Severity = Severity.ANALYTIC

    @field_validator("parameters", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Optional[Dict[str, Any]]:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise ValueError("parameters must be a mapping")
        return normalize_parameters(value)
