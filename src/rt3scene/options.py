"""
Parse options.
"""

from dataclasses import dataclass
from enum import Enum


class MalformedPolicy(Enum):
    """What to do with an attribute that is present but not convertible."""
    IGNORE = "ignore"   # Drop it silently
    WARN = "warn"       # Drop it and report a W103 warning
    STRICT = "strict"   # Abort the parse with AttributeConversionError


@dataclass(frozen=True)
class ParseOptions:
    """Options controlling one scene parse."""
    malformed: MalformedPolicy = MalformedPolicy.IGNORE
    max_depth: int = 16


DEFAULT_OPTIONS = ParseOptions()
