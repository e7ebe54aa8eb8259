from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from xrns_render.errors import InvalidConfigError
from xrns_render.model.types import GlobalSongData, Line, NoteColumn, Pattern, PatternPool, PatternTrack, Song, Track
from xrns_render.render.colors import DEFAULT_PALETTE, Category
from xrns_render.render.export import export_patterns, pattern_filename
from xrns_render.render.grid import render
from xrns_render.util.config import RenderConfig, load_config, parse_color


def _song() -> Song:
    line = Line(index=1, note_columns=[NoteColumn(note="C-4", instrument="01")])
    return Song(
        global_song_data=GlobalSongData(lines_per_beat=4),
        tracks=[Track(name="T")],
        pattern_pool=PatternPool(
            patterns=[
                Pattern(number_of_lines=4, tracks=[PatternTrack(lines=[line])]),
                Pattern(number_of_lines=8, tracks=[PatternTrack(alias_pattern_index=0)]),
            ]
        ),
    )


def test_parse_color() -> None:
    assert parse_color("#D4CE2A") == (0xD4, 0xCE, 0x2A, 255)
    assert parse_color("10203040") == (0x10, 0x20, 0x30, 0x40)
    with pytest.raises(InvalidConfigError):
        parse_color("#12345")


def test_missing_config_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg == RenderConfig()
    assert cfg.palette() == dict(DEFAULT_PALETTE)


def test_yaml_config_overrides_colors(tmp_path: Path) -> None:
    p = tmp_path / "theme.yaml"
    p.write_text(
        "background: true\n"
        "prefix: pat_\n"
        "colors:\n"
        "  default:\n"
        "    normal: '#102030'\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.background is True
    assert cfg.prefix == "pat_"

    pal = cfg.palette()
    assert pal[Category.DEFAULT].normal == (0x10, 0x20, 0x30, 255)
    assert pal[Category.DEFAULT].highlighted == DEFAULT_PALETTE[Category.DEFAULT].highlighted
    assert pal[Category.VOLUME] == DEFAULT_PALETTE[Category.VOLUME]

    img = render(_song(), 0, cfg)
    # top row of "C" on row 1 (not a beat row)
    assert img.getpixel((2, 10)) == (0x10, 0x20, 0x30, 255)


def test_unknown_color_category_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "theme.yaml"
    p.write_text("colors:\n  sparkle:\n    normal: '#FFFFFF'\n", encoding="utf-8")
    with pytest.raises(InvalidConfigError, match="sparkle"):
        load_config(p)


def test_pattern_filename_is_zero_padded() -> None:
    assert pattern_filename(0) == "pattern00.png"
    assert pattern_filename(7, "song_") == "song_07.png"
    assert pattern_filename(123) == "pattern123.png"


def test_export_writes_one_png_per_pattern_in_order(tmp_path: Path) -> None:
    written = export_patterns(_song(), tmp_path / "out")
    assert [Path(p).name for p in written] == ["pattern00.png", "pattern01.png"]

    with Image.open(written[1]) as img:
        assert img.mode == "RGBA"
        assert img.size == (51, 82)


def test_export_selected_patterns(tmp_path: Path) -> None:
    written = export_patterns(_song(), tmp_path, config=RenderConfig(prefix="p"), indices=[1, 1])
    assert [Path(p).name for p in written] == ["p01.png"]
