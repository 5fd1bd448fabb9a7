"""Tag catalog loading with bundled data and external override support.

The catalog declares, for every scene tag, the render API method it calls
and the ordered list of attributes (kind + name) extracted into its
ParamSet:
- Bundled YAML data file for the standard tags
- Environment variable override for custom data directories
- User config directory support (~/.config/rt3scene/)
- Explicit path override in API calls

Environment Variables:
    RT3SCENE_TAG_DATA: Colon-separated (or semicolon on Windows) paths
                       to directories containing a custom tags.yaml.
                       These are searched before bundled data.

Example:
    export RT3SCENE_TAG_DATA="/path/to/my/tags:/another/path"
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml

from .dispatcher import AttributeDecl
from .kinds import resolve_kind_name

__all__ = [
    "RT3SCENE_TAG_DATA",
    "TagSchema",
    "TagCatalog",
    "normalize_tag",
    "load_catalog",
    "clear_cache",
]

# Environment variable name for custom data paths
RT3SCENE_TAG_DATA = "RT3SCENE_TAG_DATA"

CATALOG_FILENAME = "tags.yaml"

# Bundled data location (relative to this file)
_BUNDLED_DATA_DIR = Path(__file__).parent / "data"


def normalize_tag(name: str) -> str:
    """Case-fold a tag name, dropping any namespace and surrounding whitespace."""
    name = str(name)
    if name.startswith("{"):
        name = name.split("}", 1)[-1]
    return name.strip().lower()


@dataclass(frozen=True)
class TagSchema:
    """How one scene tag is turned into a render API call."""
    name: str
    call: str
    attributes: Tuple[AttributeDecl, ...] = ()
    params: bool = True     # False: the API method takes no ParamSet
    nested: bool = False    # True: child tags are walked one level deeper


class TagCatalog:
    """Known scene tags, keyed by normalized tag name."""

    def __init__(self, schemas: Optional[List[TagSchema]] = None, source: Optional[str] = None):
        self.source = source
        self._schemas: Dict[str, TagSchema] = {}
        for schema in schemas or []:
            self._schemas[normalize_tag(schema.name)] = schema

    def lookup(self, tag_name: str) -> Optional[TagSchema]:
        """Find the schema for a tag name (case-insensitive)."""
        return self._schemas.get(normalize_tag(tag_name))

    def names(self) -> List[str]:
        return list(self._schemas)

    def __contains__(self, tag_name: object) -> bool:
        return isinstance(tag_name, str) and normalize_tag(tag_name) in self._schemas

    def __iter__(self) -> Iterator[TagSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Optional[str] = None) -> "TagCatalog":
        """Build a catalog from parsed YAML data.

        Raises:
            ValueError: If the data does not follow the catalog schema
        """
        where = source or "<catalog>"
        # Basic structure validation
        if not isinstance(data, Mapping):
            raise ValueError(f"Invalid catalog format in {where}: expected dict at root")

        # Validate schema version
        schema_version = data.get("schema_version", "1.0")
        if not isinstance(schema_version, str) or not schema_version.startswith("1."):
            raise ValueError(
                f"Unsupported schema version '{schema_version}' in {where}. "
                f"Expected version 1.x"
            )

        tags = data.get("tags")
        if not isinstance(tags, Mapping):
            raise ValueError(f"Catalog {where} missing required 'tags' section")

        schemas = [_schema_from_entry(str(name), entry, where) for name, entry in tags.items()]
        return cls(schemas, source=source)


def _flag(entry: Mapping[str, Any], key: str, default: bool, name: str, where: str) -> bool:
    value = entry.get(key, default)
    # A quoted "false" would otherwise be truthy
    if not isinstance(value, bool):
        raise ValueError(f"Tag '{name}' in {where}: '{key}' must be true or false")
    return value


def _schema_from_entry(name: str, entry: Any, where: str) -> TagSchema:
    if entry is None:
        entry = {}
    if not isinstance(entry, Mapping):
        raise ValueError(f"Tag '{name}' in {where} must be a mapping")

    params = _flag(entry, "params", True, name, where)
    nested = _flag(entry, "nested", False, name, where)
    raw_attributes = entry.get("attributes") or []
    if not isinstance(raw_attributes, list):
        raise ValueError(f"Tag '{name}' in {where}: 'attributes' must be a list")
    if raw_attributes and not params:
        raise ValueError(f"Tag '{name}' in {where} declares attributes but 'params' is false")

    attributes = []
    for item in raw_attributes:
        if not isinstance(item, Mapping) or "name" not in item or "kind" not in item:
            raise ValueError(f"Tag '{name}' in {where}: each attribute needs 'name' and 'kind'")
        kind = resolve_kind_name(item["kind"])
        if kind is None:
            raise ValueError(
                f"Tag '{name}' in {where}: unknown kind '{item['kind']}' "
                f"for attribute '{item['name']}'"
            )
        attributes.append(AttributeDecl(kind, str(item["name"])))

    return TagSchema(
        name=normalize_tag(name),
        call=str(entry.get("call", normalize_tag(name))),
        attributes=tuple(attributes),
        params=params,
        nested=nested,
    )


def clear_cache() -> None:
    """Clear all cached catalog data.

    Call this if you modify external catalog files and want to reload.
    """
    _get_data_dirs.cache_clear()
    _load_catalog_cached.cache_clear()


@lru_cache(maxsize=None)
def _get_data_dirs() -> tuple[Path, ...]:
    """Return tuple of data directories to search, in priority order.

    Search order:
        1. Directories from RT3SCENE_TAG_DATA environment variable
        2. User config directory (~/.config/rt3scene/)
        3. Bundled data directory
    """
    dirs: List[Path] = []

    # 1. Environment variable (highest priority)
    env_path = os.environ.get(RT3SCENE_TAG_DATA)
    if env_path:
        # Use appropriate path separator for platform
        sep = ";" if sys.platform == "win32" else ":"
        for p in env_path.split(sep):
            p = p.strip()
            if p:
                path = Path(p).expanduser().resolve()
                if path.is_dir():
                    dirs.append(path)

    # 2. User config directory
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"

    user_config = config_base / "rt3scene"
    if user_config.is_dir():
        dirs.append(user_config)

    # 3. Bundled data (always available as fallback)
    if _BUNDLED_DATA_DIR.is_dir():
        dirs.append(_BUNDLED_DATA_DIR)

    return tuple(dirs)


@lru_cache(maxsize=32)
def _load_catalog_cached(custom_path_str: Optional[str]) -> TagCatalog:
    """Cached catalog loading (string path for hashability)."""
    if custom_path_str:
        custom_path = Path(custom_path_str)
        if not custom_path.exists():
            raise FileNotFoundError(f"Custom tag catalog not found: {custom_path}")
        return _load_yaml(custom_path)

    # First catalog file found wins
    for data_dir in _get_data_dirs():
        path = data_dir / CATALOG_FILENAME
        if path.exists():
            return _load_yaml(path)

    searched = [str(d) for d in _get_data_dirs()]
    raise FileNotFoundError(
        f"No {CATALOG_FILENAME} found.\n"
        f"Searched directories: {searched}"
    )


def _load_yaml(path: Path) -> TagCatalog:
    """Load and validate a YAML catalog file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return TagCatalog.from_dict(data, source=str(path))


def load_catalog(custom_path: Optional[Path] = None) -> TagCatalog:
    """Load the tag catalog.

    Args:
        custom_path: Optional explicit path to a YAML file (overrides search)

    Returns:
        TagCatalog for the first catalog file found

    Raises:
        FileNotFoundError: If no catalog file is found
        ValueError: If the catalog has an invalid format

    Search order (unless custom_path specified):
        1. $RT3SCENE_TAG_DATA directories
        2. ~/.config/rt3scene/
        3. Bundled data
    """
    custom_str = str(custom_path) if custom_path else None
    return _load_catalog_cached(custom_str)
