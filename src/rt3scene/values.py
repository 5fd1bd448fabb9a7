"""
Typed parameter values.

A ParamValue pairs an immutable payload with the ParamKind it was read as,
so values of different kinds can share one ParamSet.
"""

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Iterable, Tuple

from .kinds import KindCategory, ParamKind


@dataclass(frozen=True)
class ParamValue:
    """
    A parameter value with its kind.

    The `data` field holds the payload in canonical form:
    bool/int/float/str for scalars, a tuple of numbers for composites and
    a tuple of scalars or tuples for arrays.
    """
    kind: ParamKind
    data: Any

    def __repr__(self) -> str:
        return f"ParamValue({self.kind.value}, {self.data!r})"

    def to_json(self) -> Any:
        """Plain JSON-friendly form of the payload."""
        if self.kind.category == KindCategory.ARRAY:
            if self.kind.arity > 1:
                return [list(item) for item in self.data]
            return list(self.data)
        if self.kind.category == KindCategory.COMPOSITE:
            return list(self.data)
        return self.data


def _scalar(kind: ParamKind, data: Any) -> Any:
    if kind == ParamKind.BOOL:
        if not isinstance(data, bool):
            raise ValueError(f"{kind.value} value must be a bool, got {data!r}")
        return data
    if kind == ParamKind.STRING:
        if not isinstance(data, str):
            raise ValueError(f"{kind.value} value must be a str, got {data!r}")
        return data
    if kind.is_integral:
        if isinstance(data, bool) or not isinstance(data, Integral):
            raise ValueError(f"{kind.value} component must be an integer, got {data!r}")
        if kind == ParamKind.UINT and data < 0:
            raise ValueError(f"{kind.value} value must be non-negative, got {data!r}")
        return int(data)
    if isinstance(data, bool) or not isinstance(data, Real):
        raise ValueError(f"{kind.value} component must be a real number, got {data!r}")
    return float(data)


def _composite(kind: ParamKind, data: Any) -> Tuple:
    components = tuple(data)
    if len(components) != kind.arity:
        raise ValueError(
            f"{kind.value} needs {kind.arity} components, got {len(components)}"
        )
    component_kind = ParamKind.INT if kind.is_integral else ParamKind.REAL
    return tuple(_scalar(component_kind, c) for c in components)


def _canonical(kind: ParamKind, data: Any) -> Any:
    if kind.category == KindCategory.SCALAR:
        return _scalar(kind, data)
    if kind.category == KindCategory.COMPOSITE:
        return _composite(kind, data)
    return tuple(_canonical(kind.element_kind, item) for item in data)


def make_value(kind: ParamKind, data: Any) -> ParamValue:
    """
    Wrap raw Python data as a ParamValue of the given kind.

    Raises ValueError if `data` cannot represent `kind`.
    """
    return ParamValue(kind, _canonical(kind, data))


# Convenience constructors

def bool_val(b: bool) -> ParamValue:
    return make_value(ParamKind.BOOL, b)


def int_val(n: int) -> ParamValue:
    return make_value(ParamKind.INT, n)


def uint_val(n: int) -> ParamValue:
    return make_value(ParamKind.UINT, n)


def real_val(x: float) -> ParamValue:
    return make_value(ParamKind.REAL, x)


def string_val(s: str) -> ParamValue:
    return make_value(ParamKind.STRING, s)


def vec3f_val(x: float, y: float, z: float) -> ParamValue:
    return make_value(ParamKind.VEC3F, (x, y, z))


def vec3i_val(x: int, y: int, z: int) -> ParamValue:
    return make_value(ParamKind.VEC3I, (x, y, z))


def normal3f_val(x: float, y: float, z: float) -> ParamValue:
    return make_value(ParamKind.NORMAL3F, (x, y, z))


def point3f_val(x: float, y: float, z: float) -> ParamValue:
    return make_value(ParamKind.POINT3F, (x, y, z))


def point2i_val(x: int, y: int) -> ParamValue:
    return make_value(ParamKind.POINT2I, (x, y))


def color_val(r: float, g: float, b: float) -> ParamValue:
    return make_value(ParamKind.COLOR, (r, g, b))


def spectrum_val(r: float, g: float, b: float) -> ParamValue:
    return make_value(ParamKind.SPECTRUM, (r, g, b))


def array_val(kind: ParamKind, items: Iterable[Any]) -> ParamValue:
    """Create an array value; `kind` must be one of the ARR_* kinds."""
    if not kind.is_array:
        raise ValueError(f"{kind.value} is not an array kind")
    return make_value(kind, list(items))
