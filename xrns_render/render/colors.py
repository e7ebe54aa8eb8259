from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

RGBA = tuple[int, int, int, int]


class Category(str, Enum):
    BACKGROUND = "background"
    DEFAULT = "default"
    VOLUME = "volume"
    PANNING = "panning"
    PITCH = "pitch"
    DELAY = "delay"
    GLOBAL_FX = "global_fx"
    OTHER_FX = "other_fx"
    DSP_FX = "dsp_fx"
    UNUSED_FX = "unused_fx"


@dataclass(frozen=True)
class ColorPair:
    normal: RGBA
    highlighted: RGBA

    def get(self, highlighted: bool) -> RGBA:
        return self.highlighted if highlighted else self.normal


Palette = Mapping[Category, ColorPair]

DEFAULT_PALETTE: Palette = MappingProxyType(
    {
        Category.BACKGROUND: ColorPair((0x15, 0x15, 0x15, 255), (0x29, 0x29, 0x29, 255)),
        Category.DEFAULT: ColorPair((0x94, 0x94, 0x94, 255), (0xFF, 0xFF, 0xFF, 255)),
        Category.VOLUME: ColorPair((0xD4, 0xCE, 0x2A, 255), (0xBF, 0xAE, 0x25, 255)),
        Category.PANNING: ColorPair((0x9D, 0xD6, 0x8C, 255), (0x81, 0xAF, 0x72, 255)),
        Category.PITCH: ColorPair((0xB4, 0x4F, 0x21, 255), (0x9B, 0x44, 0x1D, 255)),
        Category.DELAY: ColorPair((0x42, 0xC1, 0xEA, 255), (0x3D, 0xB4, 0xDA, 255)),
        Category.GLOBAL_FX: ColorPair((0xFD, 0x97, 0x14, 255), (0xC6, 0x76, 0x10, 255)),
        Category.OTHER_FX: ColorPair((0xBA, 0x68, 0xBB, 255), (0x9A, 0x56, 0x9B, 255)),
        Category.DSP_FX: ColorPair((0xDB, 0xDB, 0xDB, 255), (0xE5, 0xE5, 0xE5, 255)),
        Category.UNUSED_FX: ColorPair((0x9C, 0x9C, 0x9C, 255), (0x9C, 0x9C, 0x9C, 255)),
    }
)

GLOBAL_FX_COMMANDS = frozenset({"ZT", "ZL", "ZK", "ZG", "ZB", "ZD"})

# Checked in order after the global commands; keyed on the second character.
_SECOND_CHAR_RULES: tuple[tuple[frozenset[str], Category], ...] = (
    (frozenset("AUDGV"), Category.PITCH),
    (frozenset("IOTCML"), Category.VOLUME),
    (frozenset("SBEQRY"), Category.DELAY),
    (frozenset("NPW"), Category.PANNING),
    (frozenset("XZJ"), Category.OTHER_FX),
)


def fx_category(number: str) -> Category:
    """Classify a 2-char effect mnemonic (e.g. "0A", "ZT") into a color category."""

    if len(number) != 2:
        return Category.UNUSED_FX
    if number in GLOBAL_FX_COMMANDS:
        return Category.GLOBAL_FX
    for chars, category in _SECOND_CHAR_RULES:
        if number[1] in chars:
            return category
    return Category.UNUSED_FX


def fx_color(number: str, palette: Palette = DEFAULT_PALETTE) -> ColorPair:
    return palette[fx_category(number)]


def fx_command(number: str) -> str:
    """Display form of an effect mnemonic: a leading "0" is shown as a space."""

    if number[:1] == "0" and len(number) >= 2:
        return " " + number[1]
    return number
