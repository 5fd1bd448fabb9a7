"""
Scene-parsing exceptions and diagnostics.

Error code ranges:
- E0xx: Document errors (fatal)
- E1xx: Attribute errors (fatal only under the strict malformed policy)
- W1xx: Recoverable warnings (the walk continues)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .source import SourceSpan, UNKNOWN_SPAN


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E001, W101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: SourceSpan = UNKNOWN_SPAN
    source_line: Optional[str] = None   # The markup line the element starts on
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        if self.span.start.line > 0:
            parts.append(f"{self.span.start}: {self.severity.value}[{self.code}]: {self.message}")
        elif self.span.start.filename:
            parts.append(f"{self.span.start.filename}: {self.severity.value}[{self.code}]: {self.message}")
        else:
            parts.append(f"{self.severity.value}[{self.code}]: {self.message}")

        if show_source and self.source_line is not None:
            parts.append("  |")
            line_num = str(self.span.start.line)
            parts.append(f"{line_num:>3} | {self.source_line.rstrip()}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "file": self.span.start.filename,
            "line": self.span.start.line,
            "hints": self.hints,
        }


class SceneError(Exception):
    """Base exception for scene parsing errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.format()


class SceneLoadError(SceneError):
    """The scene source could not be read or is not valid markup (E001, E002)."""
    pass


class EmptySceneError(SceneError):
    """The scene root holds no tags (E003)."""
    pass


class AttributeConversionError(SceneError):
    """A present attribute could not be converted to its declared kind (E101)."""
    pass


# --- Document error codes ---

def error_unreadable_source(source: str, reason: str) -> SceneLoadError:
    """E001: Source missing or unreadable."""
    diag = Diagnostic(
        code="E001",
        message=f'the scene "{source}" is not available: {reason}',
        severity=ErrorSeverity.ERROR,
        hints=["check the path and file permissions"],
    )
    return SceneLoadError(diag)


def error_invalid_markup(source: str, reason: str, span: SourceSpan = UNKNOWN_SPAN) -> SceneLoadError:
    """E002: Source is not well-formed markup."""
    diag = Diagnostic(
        code="E002",
        message=f'the scene "{source}" contains invalid markup: {reason}',
        severity=ErrorSeverity.ERROR,
        span=span,
    )
    return SceneLoadError(diag)


def error_empty_scene(root_tag: str, span: SourceSpan = UNKNOWN_SPAN,
                      source_line: Optional[str] = None) -> EmptySceneError:
    """E003: Root element has no child tags."""
    diag = Diagnostic(
        code="E003",
        message=f'no tags found inside the "{root_tag}" root element; empty scene file?',
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return EmptySceneError(diag)


# --- Attribute error codes ---

def error_malformed_attribute(tag: str, name: str, kind_name: str, text: str,
                              span: SourceSpan = UNKNOWN_SPAN,
                              source_line: Optional[str] = None) -> AttributeConversionError:
    """E101: Attribute text does not match its declared kind."""
    diag = Diagnostic(
        code="E101",
        message=f"attribute '{name}' of `{tag}` is not a valid {kind_name}: {text!r}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return AttributeConversionError(diag)


# --- Warnings ---

def warning_unknown_tag(tag: str, span: SourceSpan = UNKNOWN_SPAN,
                        source_line: Optional[str] = None) -> Diagnostic:
    """W101: Tag name not found in the tag catalog."""
    return Diagnostic(
        code="W101",
        message=f"unrecognized tag `{tag}`",
        severity=ErrorSeverity.WARNING,
        span=span,
        source_line=source_line,
    )


def warning_unsupported_kind(name: str, kind_name: str, span: SourceSpan = UNKNOWN_SPAN,
                             source_line: Optional[str] = None) -> Diagnostic:
    """W102: Declared kind has no registered conversion."""
    hints = []
    if kind_name == "bool":
        hints.append("declare boolean attributes as 'string' and interpret the text downstream")
    return Diagnostic(
        code="W102",
        message=f"unknown param kind '{kind_name}' for attribute '{name}'",
        severity=ErrorSeverity.WARNING,
        span=span,
        source_line=source_line,
        hints=hints,
    )


def warning_malformed_attribute(tag: str, name: str, kind_name: str, text: str,
                                span: SourceSpan = UNKNOWN_SPAN,
                                source_line: Optional[str] = None) -> Diagnostic:
    """W103: Attribute text does not match its declared kind; attribute dropped."""
    return Diagnostic(
        code="W103",
        message=f"attribute '{name}' of `{tag}` is not a valid {kind_name}: {text!r}; ignored",
        severity=ErrorSeverity.WARNING,
        span=span,
        source_line=source_line,
    )


def warning_missing_entry_point(tag: str, call: str, span: SourceSpan = UNKNOWN_SPAN,
                                source_line: Optional[str] = None) -> Diagnostic:
    """W104: Render API has no method for a catalogued tag."""
    return Diagnostic(
        code="W104",
        message=f"render API has no entry point '{call}' for tag `{tag}`",
        severity=ErrorSeverity.WARNING,
        span=span,
        source_line=source_line,
    )


def warning_max_depth(tag: str, max_depth: int, span: SourceSpan = UNKNOWN_SPAN,
                      source_line: Optional[str] = None) -> Diagnostic:
    """W105: Nested tags deeper than the configured limit."""
    return Diagnostic(
        code="W105",
        message=f"children of `{tag}` exceed the maximum nesting depth of {max_depth}; skipped",
        severity=ErrorSeverity.WARNING,
        span=span,
        source_line=source_line,
    )


class DiagnosticCollector:
    """Collects diagnostics during one parse."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == ErrorSeverity.WARNING)

    @property
    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def codes(self) -> List[str]:
        """Diagnostic codes in the order they were reported."""
        return [d.code for d in self.diagnostics]

    def format_all(self, show_source: bool = True) -> str:
        """Format all diagnostics for display."""
        parts = [d.format(show_source) for d in self.diagnostics]
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s), {self.warning_count} warning(s)")
        elif self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        return "\n\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self.error_count,
            "warning_count": self.warning_count,
        }
