"""
Parameter dispatcher: fills a ParamSet from a declared attribute list.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence

from .errors import (
    DiagnosticCollector,
    error_malformed_attribute,
    warning_malformed_attribute,
    warning_unsupported_kind,
)
from .kinds import ParamKind
from .options import DEFAULT_OPTIONS, MalformedPolicy, ParseOptions
from .paramset import ParamSet
from .reader import has_conversion, read_attribute
from .source import element_span, line_at

logger = logging.getLogger(__name__)


class AttributeDecl(NamedTuple):
    """One expected attribute of a tag: its kind and name."""
    kind: ParamKind
    name: str


def populate(
    element,
    declared: Sequence[AttributeDecl],
    *,
    tag: Optional[str] = None,
    options: Optional[ParseOptions] = None,
    diagnostics: Optional[DiagnosticCollector] = None,
    filename: Optional[str] = None,
    source_lines: Optional[List[str]] = None,
) -> ParamSet:
    """
    Extract the declared attributes of `element` into a new ParamSet.

    Attributes that are missing are skipped without comment. Attributes
    whose kind has no conversion are skipped with a W102 warning. Present
    but malformed attributes are handled according to `options.malformed`.

    Args:
        element: Markup element to read; never modified
        declared: Ordered (kind, name) pairs expected on this tag
        tag: Tag name used in messages (defaults to the element's tag)
        options: Parse options (malformed-attribute policy)
        diagnostics: Collector receiving warnings, if any
        filename: Source name used in diagnostic locations
        source_lines: Source text lines used to quote the offending line

    Returns:
        ParamSet holding one entry per successfully converted attribute

    Raises:
        AttributeConversionError: Malformed attribute under the STRICT policy
    """
    options = options or DEFAULT_OPTIONS
    tag = tag or str(element.tag)
    ps = ParamSet()

    def report(diag) -> None:
        logger.warning(diag.format(show_source=False))
        if diagnostics is not None:
            diagnostics.add(diag)

    for kind, name in declared:
        text = element.get(name)
        if text is None:
            continue

        logger.debug("parsing attribute %r of `%s` as %s", name, tag, kind.value)
        span = element_span(element, filename)
        source_line = line_at(source_lines, span.start.line)

        if not has_conversion(kind):
            report(warning_unsupported_kind(name, kind.value, span, source_line))
            continue

        value = read_attribute(element, name, kind)
        if value is not None:
            ps.set(name, value)
            logger.debug("added attribute (%s: %r)", name, value.data)
            continue

        if options.malformed == MalformedPolicy.STRICT:
            raise error_malformed_attribute(tag, name, kind.value, text, span, source_line)
        if options.malformed == MalformedPolicy.WARN:
            report(warning_malformed_attribute(tag, name, kind.value, text, span, source_line))
        else:
            logger.debug("dropped malformed attribute %r of `%s`: %r", name, tag, text)

    return ps
