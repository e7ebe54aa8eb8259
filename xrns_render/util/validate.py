from __future__ import annotations

from xrns_render.errors import RenderPreconditionError
from xrns_render.model.types import Song


def check_render_preconditions(song: Song, pattern_index: int) -> None:
    """Reject song models the renderer cannot draw without guessing.

    Violations are fatal for the pattern; nothing here is repaired.
    """

    patterns = song.pattern_pool.patterns
    if not (0 <= pattern_index < len(patterns)):
        raise RenderPreconditionError(f"pattern index out of range: {pattern_index} (pool has {len(patterns)})")

    lpb = song.global_song_data.lines_per_beat
    if lpb <= 0:
        raise RenderPreconditionError(f"lines_per_beat must be > 0, got {lpb}")

    pattern = patterns[pattern_index]
    if pattern.number_of_lines < 0:
        raise RenderPreconditionError(f"pattern {pattern_index}: negative number_of_lines")

    for i, track in enumerate(song.tracks):
        if track.number_of_visible_note_columns < 0 or track.number_of_visible_effect_columns < 0:
            raise RenderPreconditionError(
                f"track {i} ({track.name}): negative visible column count "
                f"(notes={track.number_of_visible_note_columns}, fx={track.number_of_visible_effect_columns})"
            )

    n_tracks = len(song.tracks)
    if len(pattern.tracks) != n_tracks:
        raise RenderPreconditionError(
            f"pattern {pattern_index}: {len(pattern.tracks)} pattern tracks for {n_tracks} song tracks"
        )

    for i, pt in enumerate(pattern.tracks):
        if not pt.is_alias:
            continue
        alias = pt.alias_pattern_index
        if alias >= len(patterns):
            raise RenderPreconditionError(
                f"pattern {pattern_index} track {i}: alias pattern index {alias} out of range"
            )
        if len(patterns[alias].tracks) != n_tracks:
            raise RenderPreconditionError(
                f"pattern {pattern_index} track {i}: aliased pattern {alias} has "
                f"{len(patterns[alias].tracks)} tracks for {n_tracks} song tracks"
            )
