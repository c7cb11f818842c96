"""Placement of styled characters into text runs and background rectangles."""

from __future__ import annotations

import enum
from collections.abc import Container, Sequence
from dataclasses import dataclass

from riotty.geometry import Rect
from riotty.sugar import Color, Sugar, SugarloafStyle

FontBound = tuple[float, float]


class FontId(enum.IntEnum):
    """Indices of the fonts loaded for rendering, in loading order."""

    REGULAR = 0
    SYMBOL = 1
    EMOJIS = 2
    UNICODE = 3
    BOLD = 4
    ITALIC = 5
    BOLD_ITALIC = 6


@dataclass
class FontBounds:
    """Measured cell size, width then height, of each fallback font."""

    default: FontBound = (0.0, 0.0)
    symbols: FontBound = (0.0, 0.0)
    emojis: FontBound = (0.0, 0.0)
    unicode: FontBound = (0.0, 0.0)


@dataclass(frozen=True)
class TextRun:
    """One character queued for drawing with its font, colour and scale."""

    content: str
    font_id: FontId
    color: Color
    scale: float


_FALLBACK_ORDER = (FontId.REGULAR, FontId.SYMBOL, FontId.EMOJIS, FontId.UNICODE)


def _advance(bounds: FontBounds, font_id: FontId) -> float:
    if font_id is FontId.SYMBOL:
        return bounds.symbols[0]
    if font_id is FontId.EMOJIS:
        return bounds.emojis[0]
    if font_id is FontId.UNICODE:
        return bounds.unicode[0]
    return bounds.default[0]


def select_font(sugar: Sugar, coverage: Sequence[Container[str]]) -> FontId:
    """Pick the font for a character.

    ``coverage`` holds, for the regular, symbol, emoji and unicode fonts in
    that order, the characters each font has a glyph for. The first font that
    covers the character wins; when none does the regular font is used. Only
    the regular font is swapped for its bold or italic variants.
    """
    if len(coverage) != len(_FALLBACK_ORDER):
        raise ValueError(
            f"coverage must describe {len(_FALLBACK_ORDER)} fonts, got {len(coverage)}"
        )
    font_id = next(
        (fid for fid, glyphs in zip(_FALLBACK_ORDER, coverage) if sugar.content in glyphs),
        FontId.REGULAR,
    )
    if font_id is FontId.REGULAR and sugar.style is not None:
        if sugar.style.is_bold_italic:
            return FontId.BOLD_ITALIC
        if sugar.style.is_bold:
            return FontId.BOLD
        if sugar.style.is_italic:
            return FontId.ITALIC
    return font_id


class StackLayout:
    """Lays stacks of characters out line by line.

    Each call to :meth:`stack` queues one line: its text runs go to
    ``sections`` as ``(screen_position, bounds, runs)`` and one background
    rectangle per character goes to the pending rectangles.
    """

    def __init__(
        self,
        scale: float,
        font_bounds: FontBounds,
        coverage: Sequence[Container[str]],
    ) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(coverage) != len(_FALLBACK_ORDER):
            raise ValueError(
                f"coverage must describe {len(_FALLBACK_ORDER)} fonts, got {len(coverage)}"
            )
        self.scale = scale
        self.initial_scale = scale
        self.font_bounds = font_bounds
        self.coverage = coverage
        self.sections: list[tuple[tuple[float, float], tuple[float, float], list[TextRun]]] = []
        self._rects: list[Rect] = []
        self._acc_line = 0.0
        self._acc_line_y = 0.0

    def rescale(self, scale: float) -> StackLayout:
        """Change the current scale factor."""
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        return self

    def stack(self, stack: Sequence[Sugar], style: SugarloafStyle) -> list[TextRun]:
        """Queue one line of characters and return its text runs."""
        screen_x, screen_y = style.screen_position

        if self._acc_line_y == 0.0:
            self._acc_line_y = (screen_y - style.text_scale) / self.scale

        mod_size = 1.0
        if self.initial_scale < 2.0:
            mod_size += self.initial_scale

        runs: list[TextRun] = []
        x = 0.0
        for sugar in stack:
            font_id = select_font(sugar, self.coverage)
            add_pos_x = _advance(self.font_bounds, font_id)
            runs.append(
                TextRun(
                    content=sugar.content,
                    font_id=font_id,
                    color=sugar.foreground_color,
                    scale=style.text_scale,
                )
            )
            self._rects.append(
                Rect(
                    position=(screen_x / self.scale + x, self._acc_line_y),
                    color=sugar.background_color,
                    size=(add_pos_x * mod_size, self.font_bounds.default[0] * mod_size),
                )
            )
            x += add_pos_x / self.initial_scale

        self.sections.append(((screen_x, screen_y + self._acc_line), style.bounds, runs))

        self._acc_line_y = (screen_y + self._acc_line) / self.scale
        self._acc_line += style.text_scale
        return runs

    def pile_rect(self, instances: Sequence[Rect]) -> StackLayout:
        """Replace the pending rectangles."""
        self._rects = list(instances)
        return self

    def take_rects(self) -> list[Rect]:
        """Finish a frame: return the pending rectangles and start over."""
        self.reset_state()
        rects, self._rects = self._rects, []
        return rects

    def reset_state(self) -> None:
        """Move the line cursor back to the top."""
        self._acc_line = 0.0
        self._acc_line_y = 0.0