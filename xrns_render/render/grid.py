from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from PIL import Image

from xrns_render.model.types import EMPTY, EffectSlot, Line, NoteSlot, Pattern, Song, Track
from xrns_render.render.colors import DEFAULT_PALETTE, Category, Palette, fx_category, fx_command
from xrns_render.render.font import CHAR_HEIGHT, CHAR_WIDTH, render_text
from xrns_render.render.layout import (
    TRACK_WIDTH_FX,
    TRACK_WIDTH_NOTE,
    TRACK_WIDTH_VOL,
    canvas_size,
    row_y,
    x_offset_upto_track,
)
from xrns_render.util.config import RenderConfig
from xrns_render.util.validate import check_render_preconditions

_LOGGER = logging.getLogger("xrns_render.render")

EMPTY_NOTE = "   "
EMPTY_VALUE = ".."
EMPTY_FX = "  "


@dataclass(frozen=True)
class TextRun:
    x: int  # relative to the track's left edge
    text: str
    category: Category


@dataclass(frozen=True)
class RowCells:
    index: int
    highlighted: bool
    runs: tuple[TextRun, ...]


def is_highlighted(row_index: int, lines_per_beat: int) -> bool:
    return row_index % lines_per_beat == 0


def note_column_runs(column: NoteSlot, track: Track, x_offset: int) -> tuple[list[TextRun], int]:
    """Text runs for one note column plus its volume/panning sub-columns.

    Returns the runs and the x offset just past the column.
    """

    if column.present:
        note, instrument, volume, panning = column.note, column.instrument, column.volume, column.panning
    else:
        note, instrument, volume, panning = EMPTY_NOTE, EMPTY_VALUE, EMPTY_VALUE, EMPTY_VALUE

    runs = [
        TextRun(x_offset, note, Category.DEFAULT),
        TextRun(x_offset + CHAR_WIDTH * 3, instrument, Category.DEFAULT),
    ]
    x_offset += TRACK_WIDTH_NOTE

    if track.volume_column_is_visible:
        runs.append(TextRun(x_offset, volume, Category.VOLUME))
        x_offset += TRACK_WIDTH_VOL

    if track.panning_column_is_visible:
        runs.append(TextRun(x_offset, panning, Category.PANNING))
        x_offset += TRACK_WIDTH_VOL

    return runs, x_offset


def effect_column_runs(column: EffectSlot, x_offset: int) -> tuple[list[TextRun], int]:
    if column.present:
        category = fx_category(column.number)
        command, value = fx_command(column.number), column.value
    else:
        category = Category.DEFAULT
        command, value = EMPTY_FX, EMPTY_FX

    runs = [
        TextRun(x_offset, command, category),
        TextRun(x_offset + CHAR_WIDTH * 2, value, category),
    ]
    return runs, x_offset + TRACK_WIDTH_FX


def _padded(columns: list, visible: int) -> list:
    # Extra columns are hidden; missing ones become placeholders.
    out = list(columns[:visible])
    out.extend([EMPTY] * (visible - len(out)))
    return out


def line_runs(track: Track, line: Line | None) -> tuple[TextRun, ...]:
    """Lay out one row of a track left to right; `None` is a fully blank row."""

    note_columns = line.note_columns if line is not None else []
    effect_columns = line.effect_columns if line is not None else []

    runs: list[TextRun] = []
    x_offset = 0
    for column in _padded(note_columns, track.number_of_visible_note_columns):
        cells, x_offset = note_column_runs(column, track, x_offset)
        runs.extend(cells)
    for column in _padded(effect_columns, track.number_of_visible_effect_columns):
        cells, x_offset = effect_column_runs(column, x_offset)
        runs.extend(cells)
    return tuple(runs)


def resolve_lines(song: Song, pattern: Pattern, track_index: int) -> list[Line]:
    """Source lines for a pattern track, following an alias one level."""

    pattern_track = pattern.tracks[track_index]
    if not pattern_track.is_alias:
        return pattern_track.lines
    return song.pattern(pattern_track.alias_pattern_index).tracks[track_index].lines


def track_rows(song: Song, pattern_index: int, track_index: int) -> Iterator[RowCells]:
    """Dense rows for one track of one pattern.

    Yields every row in [0, number_of_lines) exactly once: rows present in the
    source data first (in source order), then the remaining rows as blanks in
    ascending order. Rows past the end of the pattern are dropped, and a
    repeated row index keeps its first occurrence.
    """

    pattern = song.pattern(pattern_index)
    track = song.tracks[track_index]
    lpb = song.global_song_data.lines_per_beat
    n_lines = pattern.number_of_lines

    covered: set[int] = set()
    for line in resolve_lines(song, pattern, track_index):
        if not (0 <= line.index < n_lines) or line.index in covered:
            continue
        covered.add(line.index)
        yield RowCells(line.index, is_highlighted(line.index, lpb), line_runs(track, line))

    for index in range(n_lines):
        if index in covered:
            continue
        yield RowCells(index, is_highlighted(index, lpb), line_runs(track, None))


def render_background(canvas: Image.Image, song: Song, pattern_index: int, palette: Palette) -> None:
    back = palette[Category.BACKGROUND]
    width, height = canvas.size
    canvas.paste(back.normal, (0, 0, width, height))
    lpb = song.global_song_data.lines_per_beat
    for index in range(0, song.pattern(pattern_index).number_of_lines, lpb):
        y = row_y(index)
        canvas.paste(back.highlighted, (0, y, width, y + CHAR_HEIGHT))


def render_pattern(canvas: Image.Image, song: Song, pattern_index: int, palette: Palette = DEFAULT_PALETTE) -> None:
    for track_index in range(len(song.tracks)):
        x = x_offset_upto_track(song, track_index)
        for row in track_rows(song, pattern_index, track_index):
            y = row_y(row.index)
            for run in row.runs:
                render_text(canvas, run.text, x + run.x, y, palette[run.category].get(row.highlighted))


def render(song: Song, pattern_index: int, config: RenderConfig | None = None) -> Image.Image:
    """Render one pattern of `song` into a new RGBA image."""

    config = config or RenderConfig()
    check_render_preconditions(song, pattern_index)
    palette = config.palette()

    width, height = canvas_size(song, pattern_index)
    _LOGGER.debug("pattern %02d image size: %dx%d", pattern_index, width, height)
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    if config.background:
        render_background(canvas, song, pattern_index, palette)
    render_pattern(canvas, song, pattern_index, palette)
    return canvas


def render_all(song: Song, config: RenderConfig | None = None) -> Iterator[tuple[int, Image.Image]]:
    for index in range(len(song.patterns)):
        yield index, render(song, index, config)
