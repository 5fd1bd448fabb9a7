"""
rt3scene: scene-file reader for the RT3 renderer.

This package provides:
- Kinds and typed values for scene parameters
- ParamSet: the per-tag parameter table handed to the renderer
- Attribute reader and parameter dispatcher
- Tag walker and document entry point
- A YAML tag catalog declaring the attributes of each tag

Usage:
    from rt3scene import parse, RecordingAPI

    api = RecordingAPI()
    result = parse("scene.xml", api)
    film = api.calls_named("film")[0].params
    width = film.retrieve("x_res", ParamKind.INT, 800)
"""

__version__ = "0.1.0"

from .kinds import (
    ParamKind,
    KindCategory,
    resolve_kind_name,
)

from .values import (
    ParamValue,
    make_value,
    bool_val,
    int_val,
    uint_val,
    real_val,
    string_val,
    vec3f_val,
    vec3i_val,
    normal3f_val,
    point3f_val,
    point2i_val,
    color_val,
    spectrum_val,
    array_val,
)

from .paramset import ParamSet

from .reader import (
    convert_text,
    read_attribute,
    has_conversion,
)

from .options import (
    MalformedPolicy,
    ParseOptions,
)

from .dispatcher import (
    AttributeDecl,
    populate,
)

from .catalog import (
    TagSchema,
    TagCatalog,
    load_catalog,
    normalize_tag,
)

from .api import (
    RenderAPI,
    RecordingAPI,
    ApiCall,
)

from .walker import TagWalker

from .document import (
    ParseResult,
    parse,
    parse_string,
)

from .errors import (
    SceneError,
    SceneLoadError,
    EmptySceneError,
    AttributeConversionError,
    Diagnostic,
    DiagnosticCollector,
    ErrorSeverity,
)

__all__ = [
    # Kinds and values
    'ParamKind',
    'KindCategory',
    'resolve_kind_name',
    'ParamValue',
    'make_value',
    'bool_val',
    'int_val',
    'uint_val',
    'real_val',
    'string_val',
    'vec3f_val',
    'vec3i_val',
    'normal3f_val',
    'point3f_val',
    'point2i_val',
    'color_val',
    'spectrum_val',
    'array_val',
    'ParamSet',

    # Reading
    'convert_text',
    'read_attribute',
    'has_conversion',
    'MalformedPolicy',
    'ParseOptions',
    'AttributeDecl',
    'populate',

    # Catalog
    'TagSchema',
    'TagCatalog',
    'load_catalog',
    'normalize_tag',

    # Render API
    'RenderAPI',
    'RecordingAPI',
    'ApiCall',

    # Walking and entry
    'TagWalker',
    'ParseResult',
    'parse',
    'parse_string',

    # Errors
    'SceneError',
    'SceneLoadError',
    'EmptySceneError',
    'AttributeConversionError',
    'Diagnostic',
    'DiagnosticCollector',
    'ErrorSeverity',
]
