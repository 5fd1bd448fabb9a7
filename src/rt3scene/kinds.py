"""
Parameter kinds for scene attributes.

Kinds form a closed set organized into three categories:
    SCALAR:    bool, int, uint, real, string
    COMPOSITE: fixed-size numeric tuples (vectors, points, normals, colors)
    ARRAY:     flat sequences of a scalar or composite element kind
"""

from enum import Enum
from typing import Dict, Optional


class KindCategory(Enum):
    """Category classification for parameter kinds."""
    SCALAR = 1
    COMPOSITE = 2
    ARRAY = 3


class ParamKind(Enum):
    """Semantic type of a parameter read from a scene file."""

    BOOL = "bool"
    INT = "int"                     # Single integer
    UINT = "uint"                   # Single unsigned integer
    REAL = "real"                   # Single real number
    VEC3F = "vec3f"                 # Single Vector3f
    VEC3I = "vec3i"                 # Single Vector3i
    NORMAL3F = "normal3f"           # Single Normal3f
    POINT3F = "point3f"             # Single Point3f
    POINT2I = "point2i"             # Single Point2i
    COLOR = "color"                 # Single Color
    SPECTRUM = "spectrum"           # Single Spectrum
    STRING = "string"               # Single string
    ARR_INT = "arr_int"             # An array of integers
    ARR_REAL = "arr_real"           # An array of real numbers
    ARR_VEC3F = "arr_vec3f"         # An array of Vector3f
    ARR_VEC3I = "arr_vec3i"         # An array of Vector3i
    ARR_POINT3F = "arr_point3f"     # An array of Point3f
    ARR_COLOR = "arr_color"         # An array of Color
    ARR_NORMAL3F = "arr_normal3f"   # An array of Normal3f

    @property
    def category(self) -> KindCategory:
        if self in _ARRAY_ELEMENTS:
            return KindCategory.ARRAY
        if self in _COMPOSITE_ARITY:
            return KindCategory.COMPOSITE
        return KindCategory.SCALAR

    @property
    def element_kind(self) -> Optional["ParamKind"]:
        """Kind of one array element, or None for non-array kinds."""
        return _ARRAY_ELEMENTS.get(self)

    @property
    def arity(self) -> int:
        """Number of numeric components in one value (or one array element)."""
        base = _ARRAY_ELEMENTS.get(self, self)
        return _COMPOSITE_ARITY.get(base, 1)

    @property
    def is_integral(self) -> bool:
        """True if the components are integers."""
        base = _ARRAY_ELEMENTS.get(self, self)
        return base in (ParamKind.INT, ParamKind.UINT, ParamKind.VEC3I, ParamKind.POINT2I)

    @property
    def is_array(self) -> bool:
        return self in _ARRAY_ELEMENTS

    def __str__(self) -> str:
        return self.value


_COMPOSITE_ARITY: Dict[ParamKind, int] = {
    ParamKind.VEC3F: 3,
    ParamKind.VEC3I: 3,
    ParamKind.NORMAL3F: 3,
    ParamKind.POINT3F: 3,
    ParamKind.POINT2I: 2,
    ParamKind.COLOR: 3,
    ParamKind.SPECTRUM: 3,
}

_ARRAY_ELEMENTS: Dict[ParamKind, ParamKind] = {
    ParamKind.ARR_INT: ParamKind.INT,
    ParamKind.ARR_REAL: ParamKind.REAL,
    ParamKind.ARR_VEC3F: ParamKind.VEC3F,
    ParamKind.ARR_VEC3I: ParamKind.VEC3I,
    ParamKind.ARR_POINT3F: ParamKind.POINT3F,
    ParamKind.ARR_COLOR: ParamKind.COLOR,
    ParamKind.ARR_NORMAL3F: ParamKind.NORMAL3F,
}


# =============================================================================
# Kind Registry
# =============================================================================

# Aliases accepted in tag catalogs, in addition to the canonical names
KIND_ALIASES: Dict[str, ParamKind] = {
    "boolean": ParamKind.BOOL,
    "integer": ParamKind.INT,
    "unsigned": ParamKind.UINT,
    "float": ParamKind.REAL,
    "str": ParamKind.STRING,
    "vector": ParamKind.VEC3F,
    "vector3f": ParamKind.VEC3F,
    "vector3i": ParamKind.VEC3I,
    "normal": ParamKind.NORMAL3F,
    "point": ParamKind.POINT3F,
    "rgb": ParamKind.COLOR,
    "arr_float": ParamKind.ARR_REAL,
}


def resolve_kind_name(name: str) -> Optional[ParamKind]:
    """Look up a kind by canonical name or alias (case-insensitive)."""
    key = str(name).strip().lower()
    try:
        return ParamKind(key)
    except ValueError:
        return KIND_ALIASES.get(key)
