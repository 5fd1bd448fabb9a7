"""
Tag walker: visits scene tags at one depth and routes them to the render API.
"""

import logging
from typing import List, Optional

from .api import RenderAPI
from .catalog import TagCatalog, TagSchema, normalize_tag
from .dispatcher import populate
from .errors import (
    Diagnostic,
    DiagnosticCollector,
    warning_max_depth,
    warning_missing_entry_point,
    warning_unknown_tag,
)
from .options import DEFAULT_OPTIONS, ParseOptions
from .source import element_span, line_at

logger = logging.getLogger(__name__)

__all__ = ["TagWalker", "normalize_tag", "first_child_element", "next_element"]


def _is_element(node) -> bool:
    # Comments and processing instructions have a non-string tag
    return node is not None and isinstance(node.tag, str)


def next_element(node):
    """The next sibling that is an element, or None."""
    node = node.getnext()
    while node is not None and not _is_element(node):
        node = node.getnext()
    return node


def first_child_element(node):
    """The first child that is an element, or None."""
    for child in node:
        if _is_element(child):
            return child
    return None


class TagWalker:
    """
    Walks sibling tags, building one ParamSet per tag and calling the API.

    Unknown tags and other recoverable problems are reported as warnings and
    never stop the walk.
    """

    def __init__(
        self,
        api: RenderAPI,
        catalog: TagCatalog,
        options: Optional[ParseOptions] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
        filename: Optional[str] = None,
        source_lines: Optional[List[str]] = None,
    ):
        self.api = api
        self.catalog = catalog
        self.options = options or DEFAULT_OPTIONS
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.filename = filename
        self.source_lines = source_lines

    def _warn(self, diag: Diagnostic) -> None:
        logger.warning(diag.format(show_source=False))
        self.diagnostics.add(diag)

    def walk(self, element, level: int = 0) -> int:
        """
        Visit `element` and all following sibling elements.

        Returns the number of tags dispatched to the API, including those
        found in nested tags.
        """
        logger.debug("walking tags at level %d", level)
        count = 0
        if element is not None and not _is_element(element):
            element = next_element(element)
        while element is not None:
            count += self.visit(element, level)
            element = next_element(element)
        return count

    def visit(self, element, level: int = 0) -> int:
        """Dispatch a single tag; returns the number of tags dispatched."""
        tag_name = normalize_tag(element.tag)
        logger.debug("%s***** tag id is `%s`, at level %d", " " * (level * 3), tag_name, level)

        span = element_span(element, self.filename)
        schema = self.catalog.lookup(tag_name)
        if schema is None:
            self._warn(warning_unknown_tag(tag_name, span, line_at(self.source_lines, span.start.line)))
            return 0

        method = getattr(self.api, schema.call, None)
        if not callable(method):
            self._warn(warning_missing_entry_point(
                tag_name, schema.call, span, line_at(self.source_lines, span.start.line)))
            return 0

        if schema.params:
            ps = populate(
                element,
                schema.attributes,
                tag=tag_name,
                options=self.options,
                diagnostics=self.diagnostics,
                filename=self.filename,
                source_lines=self.source_lines,
            )
            method(ps)
        else:
            method()

        count = 1
        if schema.nested:
            count += self._walk_children(element, schema, level)
        return count

    def _walk_children(self, element, schema: TagSchema, level: int) -> int:
        child = first_child_element(element)
        if child is None:
            return 0
        if level + 1 > self.options.max_depth:
            span = element_span(element, self.filename)
            self._warn(warning_max_depth(
                schema.name, self.options.max_depth, span, line_at(self.source_lines, span.start.line)))
            return 0
        return self.walk(child, level + 1)
