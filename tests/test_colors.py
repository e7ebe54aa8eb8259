from __future__ import annotations

import pytest

from xrns_render.render.colors import DEFAULT_PALETTE, Category, fx_category, fx_color, fx_command


@pytest.mark.parametrize(
    "number,expected",
    [
        ("ZT", Category.GLOBAL_FX),
        ("ZD", Category.GLOBAL_FX),  # global wins over the pitch rule for D
        ("1A", Category.PITCH),
        ("0V", Category.PITCH),
        ("0I", Category.VOLUME),
        ("QQ", Category.DELAY),
        ("0N", Category.PANNING),
        ("XX", Category.OTHER_FX),
        ("ZZ", Category.OTHER_FX),
        ("0F", Category.UNUSED_FX),
        ("  ", Category.UNUSED_FX),
        ("Z", Category.UNUSED_FX),
    ],
)
def test_fx_category(number: str, expected: Category) -> None:
    assert fx_category(number) == expected


def test_fx_command_hides_leading_zero() -> None:
    assert fx_command("0F") == " F"
    assert fx_command("ZT") == "ZT"
    assert fx_command("1A") == "1A"
    assert fx_command("") == ""


def test_color_pair_selects_variant() -> None:
    pair = DEFAULT_PALETTE[Category.DEFAULT]
    assert pair.get(False) == (0x94, 0x94, 0x94, 255)
    assert pair.get(True) == (0xFF, 0xFF, 0xFF, 255)
    assert fx_color("ZT") is DEFAULT_PALETTE[Category.GLOBAL_FX]


def test_palette_is_read_only_and_complete() -> None:
    assert set(DEFAULT_PALETTE) == set(Category)
    with pytest.raises(TypeError):
        DEFAULT_PALETTE[Category.DEFAULT] = DEFAULT_PALETTE[Category.VOLUME]  # type: ignore[index]
