from __future__ import annotations

from xrns_render.model.types import Song, Track
from xrns_render.render.font import CHAR_HEIGHT, CHAR_WIDTH

TRACK_SPACING_X = 6  # between track blocks
TRACK_SPACING_X_FX = 3  # between cells inside a track
TRACK_SPACING_Y = 2  # between rows
BORDER = 2

TRACK_WIDTH_NOTE = TRACK_SPACING_X_FX + 5 * CHAR_WIDTH  # e.g. C-400
TRACK_WIDTH_VOL = TRACK_SPACING_X_FX + 2 * CHAR_WIDTH  # e.g. 7F
TRACK_WIDTH_FX = TRACK_SPACING_X_FX + 4 * CHAR_WIDTH  # e.g. ZT04

ROW_HEIGHT = CHAR_HEIGHT + TRACK_SPACING_Y


def track_width(track: Track) -> int:
    """Pixel width of one track block, including the trailing track spacing."""

    notes = track.number_of_visible_note_columns
    width = notes * TRACK_WIDTH_NOTE
    if track.volume_column_is_visible:
        width += notes * TRACK_WIDTH_VOL
    if track.panning_column_is_visible:
        width += notes * TRACK_WIDTH_VOL
    width += track.number_of_visible_effect_columns * TRACK_WIDTH_FX
    width += TRACK_SPACING_X
    return width


def x_offset_upto_track(song: Song, track_index: int) -> int:
    """x at which track `track_index` begins (sum of widths of tracks before it)."""
    return sum(track_width(t) for t in song.tracks[:track_index])


def row_y(row_index: int) -> int:
    return row_index * ROW_HEIGHT


def canvas_size(song: Song, pattern_index: int) -> tuple[int, int]:
    width = BORDER + x_offset_upto_track(song, len(song.tracks))
    height = BORDER + song.pattern(pattern_index).number_of_lines * ROW_HEIGHT
    return width, height
