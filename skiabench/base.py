# this_file: skiabench/base.py
"""
Error taxonomy and the abstract pipeline stage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class HarnessError(RuntimeError):
    """Fatal failure that aborts the whole run."""


class MissingAssetError(HarnessError):
    """Raised when a required input file does not exist."""

    def __init__(self, path):
        super().__init__(f"File doesn't exist: {path}")
        self.path = path


class SurfaceAllocationError(HarnessError):
    """Raised when the raster surface cannot be allocated."""


class EncodeError(HarnessError):
    """Raised when the frame cannot be encoded or written to disk."""


class StageError(RuntimeError):
    """
    Degraded failure inside a single stage.

    The composer catches these, omits the element and keeps going.
    """


class GeometryParseError(StageError):
    """Path data could not be parsed."""


class ImageDecodeError(StageError):
    """Bitmap could not be decoded."""


class FontDecodeError(StageError):
    """Font file could not be decoded into a typeface."""


class SvgParseError(StageError):
    """SVG document could not be parsed."""


@dataclass(frozen=True, slots=True)
class StageWarning:
    """
    A degraded failure recorded for one stage.

    Attributes:
        stage: Stage name ("path", "raster", "text", "svg")
        message: Human-readable reason
        skipped: True when the element was omitted from the frame entirely
    """

    stage: str
    message: str
    skipped: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"stage": self.stage, "message": self.message, "skipped": self.skipped}


class BaseStage(ABC):
    """
    Abstract base class for the element renderers.

    Subclasses draw one visual element onto a canvas that the composer has
    already wrapped in a transform scope. Placement is applied by the stage
    itself so the element's local transform never leaks to its siblings.
    """

    stage: str = "base"

    @abstractmethod
    def render(self, canvas) -> list[StageWarning]:
        """
        Draw the element.

        Returns:
            Non-fatal warnings for partially degraded output (may be empty)

        Raises:
            StageError: When the element has to be skipped altogether
        """

    def summary(self) -> dict[str, Any]:
        """
        Diagnostics for benchmarking.
        """
        return {"stage": self.stage}
