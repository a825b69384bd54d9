"""
Value model for canonical JSON
"""

from typing import Any, Dict, List, Protocol, Union, runtime_checkable


class _Undefined:
    """Marker for an absent value: nulled in arrays, omitted in objects."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


@runtime_checkable
class CanonicalValue(Protocol):
    """Types that reduce themselves to a JSON representable value."""

    def to_canonical_value(self) -> Any:
        ...


JsonValue = Union[
    str, int, float, bool, None, List[Any], Dict[str, Any], _Undefined, CanonicalValue
]


def is_transformable(value: Any) -> bool:
    """True if value exposes a callable to_canonical_value()."""
    if isinstance(value, type):
        return False
    return callable(getattr(value, "to_canonical_value", None))
