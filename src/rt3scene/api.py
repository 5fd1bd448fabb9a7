"""
Render API surface driven by the scene parser.

The walker calls one method per recognized tag, in document order, passing
the tag's ParamSet (or nothing, for world_begin/world_end). Renderers
subclass RenderAPI; RecordingAPI keeps the calls for inspection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .paramset import ParamSet


class RenderAPI(ABC):
    """
    Base class for consumers of parsed scene tags.

    camera() and look_at() default to no-ops so that an API written for the
    core tag set keeps working with catalogs that add those tags.
    """

    @abstractmethod
    def background(self, ps: ParamSet) -> None:
        pass

    @abstractmethod
    def film(self, ps: ParamSet) -> None:
        pass

    @abstractmethod
    def world_begin(self) -> None:
        pass

    @abstractmethod
    def world_end(self) -> None:
        pass

    def camera(self, ps: ParamSet) -> None:
        pass

    def look_at(self, ps: ParamSet) -> None:
        pass


@dataclass
class ApiCall:
    """One recorded API call."""
    name: str
    params: Optional[ParamSet] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "call": self.name,
            "params": self.params.to_dict() if self.params is not None else None,
        }


class RecordingAPI(RenderAPI):
    """A RenderAPI that records every call it receives."""

    def __init__(self):
        self.calls: List[ApiCall] = []

    def _record(self, name: str, ps: Optional[ParamSet] = None) -> None:
        self.calls.append(ApiCall(name, ps))

    def background(self, ps: ParamSet) -> None:
        self._record("background", ps)

    def film(self, ps: ParamSet) -> None:
        self._record("film", ps)

    def world_begin(self) -> None:
        self._record("world_begin")

    def world_end(self) -> None:
        self._record("world_end")

    def camera(self, ps: ParamSet) -> None:
        self._record("camera", ps)

    def look_at(self, ps: ParamSet) -> None:
        self._record("look_at", ps)

    def names(self) -> List[str]:
        """Names of the recorded calls, in order."""
        return [c.name for c in self.calls]

    def calls_named(self, name: str) -> List[ApiCall]:
        return [c for c in self.calls if c.name == name]

    def to_json(self) -> List[Dict[str, Any]]:
        return [c.to_json() for c in self.calls]
