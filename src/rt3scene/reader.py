"""
Attribute reader: converts raw attribute text into typed parameter values.

Every conversion returns None for "absent" instead of raising, because a
missing or malformed attribute is an ordinary outcome for hand-written
scene files.

Booleans are deliberately not convertible here. Boolean attributes are
declared as strings and interpreted by whoever consumes the ParamSet
(see ParamSet.retrieve_flag).
"""

import math
import re
from typing import Any, Callable, Dict, List, Optional

from .kinds import KindCategory, ParamKind
from .values import ParamValue

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"\+?[0-9]+")
_REAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# --- Token converters ---

def _to_int(token: str) -> Optional[int]:
    if _INT_RE.fullmatch(token):
        return int(token)
    return None


def _to_uint(token: str) -> Optional[int]:
    if _UINT_RE.fullmatch(token):
        return int(token)
    return None


def _to_real(token: str) -> Optional[float]:
    if not _REAL_RE.fullmatch(token):
        return None
    value = float(token)
    # Overflowing exponents such as 1e999 parse to inf
    return value if math.isfinite(value) else None


def _convert_tokens(tokens: List[str], convert: Callable[[str], Optional[Any]]) -> Optional[List[Any]]:
    out = []
    for token in tokens:
        value = convert(token)
        if value is None:
            return None
        out.append(value)
    return out


def _component_converter(kind: ParamKind) -> Callable[[str], Optional[Any]]:
    if kind == ParamKind.UINT:
        return _to_uint
    return _to_int if kind.is_integral else _to_real


# --- Kind converters ---

def _read_string(text: str) -> Optional[str]:
    """
    Whole attribute text, trimmed.

    Unlike a whitespace-delimited stream read, which stops at the first
    token, inner spaces are kept so that names like "my scene.png" survive.
    """
    value = text.strip()
    return value if value else None


def _scalar_reader(kind: ParamKind) -> Callable[[str], Optional[Any]]:
    convert = _component_converter(kind)

    def read(text: str) -> Optional[Any]:
        tokens = text.split()
        if len(tokens) != 1:
            return None
        return convert(tokens[0])

    return read


def _composite_reader(kind: ParamKind) -> Callable[[str], Optional[Any]]:
    convert = _component_converter(kind)

    def read(text: str) -> Optional[Any]:
        tokens = text.split()
        if len(tokens) != kind.arity:
            return None
        values = _convert_tokens(tokens, convert)
        return tuple(values) if values is not None else None

    return read


def _array_reader(kind: ParamKind) -> Callable[[str], Optional[Any]]:
    arity = kind.arity
    convert = _component_converter(kind.element_kind)

    def read(text: str) -> Optional[Any]:
        tokens = text.split()
        if len(tokens) % arity != 0:
            return None
        values = _convert_tokens(tokens, convert)
        if values is None:
            return None
        if arity == 1:
            return tuple(values)
        return tuple(tuple(values[i:i + arity]) for i in range(0, len(values), arity))

    return read


def _build_registry() -> Dict[ParamKind, Callable[[str], Optional[Any]]]:
    registry: Dict[ParamKind, Callable[[str], Optional[Any]]] = {
        ParamKind.STRING: _read_string,
    }
    for kind in ParamKind:
        if kind in (ParamKind.BOOL, ParamKind.STRING):
            continue
        if kind.category == KindCategory.SCALAR:
            registry[kind] = _scalar_reader(kind)
        elif kind.category == KindCategory.COMPOSITE:
            registry[kind] = _composite_reader(kind)
        else:
            registry[kind] = _array_reader(kind)
    return registry


# One conversion routine per supported kind; BOOL is intentionally missing
CONVERTERS: Dict[ParamKind, Callable[[str], Optional[Any]]] = _build_registry()


def has_conversion(kind: ParamKind) -> bool:
    """True if attribute text can be converted to `kind`."""
    return kind in CONVERTERS


def convert_text(text: str, kind: ParamKind) -> Optional[Any]:
    """
    Convert raw attribute text to the canonical payload for `kind`.

    Returns None if the text does not match the kind's grammar or the kind
    has no conversion.
    """
    convert = CONVERTERS.get(kind)
    if convert is None:
        return None
    return convert(text)


def read_attribute(element, name: str, kind: ParamKind) -> Optional[ParamValue]:
    """
    Read attribute `name` of a markup element as a value of `kind`.

    Returns None if the attribute is absent or not convertible.
    """
    text = element.get(name)
    if text is None:
        return None
    data = convert_text(text, kind)
    if data is None:
        return None
    return ParamValue(kind, data)
