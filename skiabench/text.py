# this_file: skiabench/text.py
"""
Styled multi-run paragraph rendering via Skia's textlayout module.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import skia
from loguru import logger

from .base import BaseStage, FontDecodeError, StageWarning
from .constants import (
    FONT_FAMILY,
    FONT_SIZE,
    PARAGRAPH_ORIGIN,
    PARAGRAPH_RUNS,
    PARAGRAPH_WIDTH,
    TEXT_PLACEMENT,
)
from .surface import Placement


@dataclass(frozen=True, slots=True)
class StyledTextRun:
    """A text segment and the color it is painted in."""

    text: str
    color: tuple[int, int, int]

    @property
    def skia_color(self) -> int:
        r, g, b = self.color
        return skia.Color(r, g, b)


def default_runs() -> tuple[StyledTextRun, ...]:
    return tuple(StyledTextRun(text, color) for text, color in PARAGRAPH_RUNS)


def joined_text(runs) -> str:
    """Paragraph content with styling dropped, in paint order."""
    return "".join(run.text for run in runs)


def load_typeface(font_path: Path):
    """
    Decode a font file.

    Raises:
        FontDecodeError: If Skia cannot build a typeface from the file
    """
    typeface = skia.Typeface.MakeFromFile(str(font_path))
    if not typeface:
        raise FontDecodeError(f"Failed to load typeface from {font_path}")
    return typeface


class TextStage(BaseStage):
    """
    Lay out and paint the multi-color paragraph.

    A font that fails to decode does not skip the stage: the family stays
    unregistered and shaping falls back to the platform font manager.
    """

    stage = "text"

    def __init__(
        self,
        font_path: Path,
        *,
        runs: tuple[StyledTextRun, ...] | None = None,
        family: str = FONT_FAMILY,
        font_size: float = FONT_SIZE,
        width: float = PARAGRAPH_WIDTH,
        origin: tuple[float, float] = PARAGRAPH_ORIGIN,
        placement: Placement | None = None,
    ):
        self.font_path = font_path
        self.runs = runs if runs is not None else default_runs()
        self.family = family
        self.font_size = font_size
        self.width = width
        self.origin = origin
        self.placement = placement or Placement.of(TEXT_PLACEMENT)

    def _font_collection(self, warnings: list[StageWarning]):
        collection = skia.textlayout.FontCollection()
        try:
            typeface = load_typeface(self.font_path)
        except FontDecodeError as exc:
            logger.debug(f"text: {exc}, falling back to default font manager")
            warnings.append(StageWarning(self.stage, str(exc), skipped=False))
            collection.setDefaultFontManager(skia.FontMgr.RefDefault())
        else:
            provider = skia.textlayout.TypefaceFontProvider()
            provider.registerTypeface(typeface, self.family)
            collection.setDefaultFontManager(provider)
        return collection

    def _text_style(self, color: int):
        style = skia.textlayout.TextStyle()
        style.setColor(color)
        style.setFontSize(self.font_size)
        style.setFontFamilies([self.family])
        return style

    def build_paragraph(self, warnings: list[StageWarning]):
        """
        Build and lay out the paragraph.

        Each run gets its own pushed style which is popped again after the
        run's text, so no run inherits another run's color.
        """
        paragraph_style = skia.textlayout.ParagraphStyle()
        paragraph_style.setTextStyle(self._text_style(skia.ColorBLACK))

        builder = skia.textlayout.ParagraphBuilder.make(
            paragraph_style, self._font_collection(warnings), skia.Unicodes.ICU.Make()
        )
        for run in self.runs:
            builder.pushStyle(self._text_style(run.skia_color))
            builder.addText(run.text)
            builder.pop()

        paragraph = builder.Build()
        paragraph.layout(self.width)
        return paragraph

    def render(self, canvas) -> list[StageWarning]:
        warnings: list[StageWarning] = []
        self.placement.apply(canvas)
        paragraph = self.build_paragraph(warnings)
        paragraph.paint(canvas, *self.origin)
        return warnings

    def summary(self):
        return {
            "stage": self.stage,
            "font": self.font_path.name,
            "family": self.family,
            "size": self.font_size,
            "runs": len(self.runs),
        }
