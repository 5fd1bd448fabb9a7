"""
Parameter sets handed to the render API, one per tag occurrence.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from .kinds import ParamKind
from .values import ParamValue

# Text accepted by retrieve_flag for boolean attributes declared as strings
FLAG_TEXT = {"true": True, "false": False}


class ParamSet:
    """
    Mapping of attribute name to ParamValue.

    A name is either present with a successfully converted value or absent;
    no placeholder is ever stored for a missing or malformed attribute.
    """

    def __init__(self, values: Optional[Dict[str, ParamValue]] = None):
        self._values: Dict[str, ParamValue] = {}
        for name, value in (values or {}).items():
            self.set(name, value)

    def set(self, name: str, value: ParamValue) -> None:
        """Insert a value, replacing any previous value under the same name."""
        if not isinstance(value, ParamValue):
            raise TypeError(f"ParamSet values must be ParamValue, got {type(value).__name__}")
        self._values[name] = value

    __setitem__ = set

    def value(self, name: str) -> Optional[ParamValue]:
        """The tagged value stored under `name`, if any."""
        return self._values.get(name)

    def get(self, name: str, kind: Optional[ParamKind] = None) -> Any:
        """
        Return the payload stored under `name`.

        If `kind` is given and the stored value has a different kind, the
        result is None, exactly as if the name were absent.
        """
        value = self._values.get(name)
        if value is None:
            return None
        if kind is not None and value.kind != kind:
            return None
        return value.data

    def retrieve(self, name: str, kind: ParamKind, default: Any = None) -> Any:
        """Like get(), but with a fallback when absent or of another kind."""
        data = self.get(name, kind)
        return default if data is None else data

    def retrieve_flag(self, name: str, default: bool = False) -> bool:
        """
        Interpret a boolean attribute that was declared as a string.

        Only "true" and "false" (any case) are recognized; anything else
        yields `default`.
        """
        text = self.get(name, ParamKind.STRING)
        if text is None:
            return default
        return FLAG_TEXT.get(text.strip().lower(), default)

    def names(self) -> List[str]:
        return list(self._values)

    def items(self) -> List[Tuple[str, ParamValue]]:
        return list(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        """Plain name -> payload dict, suitable for JSON output."""
        return {name: value.to_json() for name, value in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParamSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"ParamSet({inner})"
