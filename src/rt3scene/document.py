"""
Document entry: loads a scene file and walks its tags.

Usage:
    from rt3scene import parse, RecordingAPI

    api = RecordingAPI()
    result = parse("scene.xml", api)
    for diag in result.warnings:
        print(diag.format())
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, List, Optional, Union

from lxml import etree

from .api import RenderAPI
from .catalog import TagCatalog, load_catalog
from .errors import (
    Diagnostic,
    DiagnosticCollector,
    ErrorSeverity,
    error_empty_scene,
    error_invalid_markup,
    error_unreadable_source,
)
from .options import DEFAULT_OPTIONS, ParseOptions
from .source import SourceLocation, SourceSpan, element_span, line_at
from .walker import TagWalker, first_child_element, normalize_tag

logger = logging.getLogger(__name__)

SceneSource = Union[str, "os.PathLike[str]", IO[bytes]]


@dataclass
class ParseResult:
    """Outcome of a successful scene parse."""
    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)
    tag_count: int = 0
    filename: Optional[str] = None

    @property
    def has_warnings(self) -> bool:
        return self.diagnostics.has_warnings

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics.diagnostics if d.severity == ErrorSeverity.WARNING]


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _read_source(source: SceneSource) -> tuple:
    """Return (raw bytes, display name) for a scene source."""
    if hasattr(source, "read"):
        name = getattr(source, "name", None) or "<stream>"
        try:
            data = source.read()
        except OSError as e:
            raise error_unreadable_source(str(name), str(e)) from e
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data, str(name)

    path = Path(source)
    if not path.is_file():
        raise error_unreadable_source(str(path), "no such file")
    try:
        return path.read_bytes(), str(path)
    except OSError as e:
        raise error_unreadable_source(str(path), e.strerror or str(e)) from e


def _load_root(data: bytes, name: str):
    try:
        return etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        line = getattr(e, "lineno", None) or 0
        loc = SourceLocation(line, 1, name)
        raise error_invalid_markup(name, e.msg or str(e), SourceSpan(loc, loc)) from e


def _parse_bytes(
    data: bytes,
    name: str,
    api: RenderAPI,
    catalog: Optional[TagCatalog],
    options: Optional[ParseOptions],
) -> ParseResult:
    options = options or DEFAULT_OPTIONS
    catalog = catalog if catalog is not None else load_catalog()

    root = _load_root(data, name)
    source_lines = data.decode("utf-8", errors="replace").splitlines()

    first = first_child_element(root)
    if first is None:
        span = element_span(root, name)
        raise error_empty_scene(normalize_tag(root.tag), span, line_at(source_lines, span.start.line))

    logger.debug("parsing scene %s (root `%s`)", name, normalize_tag(root.tag))
    result = ParseResult(filename=name)
    walker = TagWalker(
        api,
        catalog,
        options=options,
        diagnostics=result.diagnostics,
        filename=name,
        source_lines=source_lines,
    )
    result.tag_count = walker.walk(first, level=0)
    return result


def parse(
    source: SceneSource,
    api: RenderAPI,
    *,
    catalog: Optional[TagCatalog] = None,
    options: Optional[ParseOptions] = None,
) -> ParseResult:
    """
    Parse a scene file and drive `api` with its tags.

    Args:
        source: Path to the scene file, or a binary file object
        api: Render API receiving one call per recognized tag
        catalog: Tag catalog (defaults to load_catalog())
        options: Parse options

    Returns:
        ParseResult with the warnings reported during the walk

    Raises:
        SceneLoadError: The source is unreadable or not valid markup
        EmptySceneError: The root element holds no tags
        AttributeConversionError: Malformed attribute under the STRICT policy
    """
    data, name = _read_source(source)
    return _parse_bytes(data, name, api, catalog, options)


def parse_string(
    text: Union[str, bytes],
    api: RenderAPI,
    *,
    catalog: Optional[TagCatalog] = None,
    options: Optional[ParseOptions] = None,
    filename: str = "<string>",
) -> ParseResult:
    """Parse scene markup held in memory; see parse()."""
    data = text.encode("utf-8") if isinstance(text, str) else text
    return _parse_bytes(data, filename, api, catalog, options)
