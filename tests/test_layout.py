from __future__ import annotations

from xrns_render.model.types import Pattern, PatternPool, PatternTrack, Song, Track
from xrns_render.render.layout import (
    TRACK_WIDTH_FX,
    TRACK_WIDTH_NOTE,
    TRACK_WIDTH_VOL,
    canvas_size,
    track_width,
    x_offset_upto_track,
)


def _song(tracks: list[Track], number_of_lines: int = 4) -> Song:
    pat = Pattern(number_of_lines=number_of_lines, tracks=[PatternTrack() for _ in tracks])
    return Song(tracks=tracks, pattern_pool=PatternPool(patterns=[pat]))


def test_cell_widths() -> None:
    assert TRACK_WIDTH_NOTE == 43
    assert TRACK_WIDTH_VOL == 19
    assert TRACK_WIDTH_FX == 35


def test_single_note_column_canvas_is_51x42() -> None:
    song = _song([Track(name="T", number_of_visible_note_columns=1)], number_of_lines=4)
    assert canvas_size(song, 0) == (51, 42)


def test_track_width_counts_volume_and_panning_per_note_column() -> None:
    t = Track(
        name="T",
        number_of_visible_note_columns=2,
        number_of_visible_effect_columns=1,
        volume_column_is_visible=True,
        panning_column_is_visible=True,
        delay_column_is_visible=True,
    )
    assert track_width(t) == 2 * 43 + 2 * 19 + 2 * 19 + 35 + 6


def test_track_with_no_columns_is_only_spacing() -> None:
    assert track_width(Track(name="Master", number_of_visible_note_columns=0)) == 6


def test_x_offsets_are_prefix_sums() -> None:
    tracks = [
        Track(name="A", number_of_visible_note_columns=1),
        Track(name="B", number_of_visible_note_columns=1, volume_column_is_visible=True),
        Track(name="C", number_of_visible_note_columns=0, number_of_visible_effect_columns=2),
    ]
    song = _song(tracks, number_of_lines=64)

    assert x_offset_upto_track(song, 0) == 0
    assert x_offset_upto_track(song, 1) == 49
    assert x_offset_upto_track(song, 2) == 49 + 68
    assert canvas_size(song, 0) == (2 + 49 + 68 + 76, 2 + 64 * 10)
