"""Styled characters and the layout style they are stacked with."""

from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float, float]


def _check_color(name: str, color: Color) -> None:
    if len(color) != 4:
        raise ValueError(f"{name} must have four components, got {len(color)}")


@dataclass(frozen=True)
class SugarStyle:
    """Font style flags for one character."""

    is_italic: bool = False
    is_bold: bool = False
    is_bold_italic: bool = False


@dataclass(frozen=True)
class Sugar:
    """One character with its foreground and background colours."""

    content: str
    foreground_color: Color
    background_color: Color
    style: SugarStyle | None = None

    def __post_init__(self) -> None:
        if len(self.content) != 1:
            raise ValueError(
                f"content must be a single character, got {self.content!r}"
            )
        _check_color("foreground_color", self.foreground_color)
        _check_color("background_color", self.background_color)


SugarStack = list[Sugar]
SugarPile = list[SugarStack]


@dataclass(frozen=True)
class SugarloafStyle:
    """Where a line of text goes on screen, its bounds and its scale."""

    screen_position: tuple[float, float] = (0.0, 0.0)
    bounds: tuple[float, float] = (0.0, 0.0)
    text_scale: float = 0.0


def empty_sugar_pile() -> SugarPile:
    """Return a pile holding a single empty stack."""
    return [[]]