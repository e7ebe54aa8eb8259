from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class EmptyColumn:
    """An absent note/effect column slot.

    Renders as a placeholder cell and still takes its layout space.
    """

    present = False

    def to_dict(self) -> None:
        return None


EMPTY = EmptyColumn()


@dataclass
class NoteColumn:
    note: str = "   "  # e.g. C-4, C#5, OFF
    instrument: str = ".."
    volume: str = ".."
    panning: str = ".."

    present = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "note": self.note,
            "instrument": self.instrument,
            "volume": self.volume,
            "panning": self.panning,
        }

    @staticmethod
    def from_dict(d: dict[str, Any] | None) -> "NoteSlot":
        if d is None:
            return EMPTY
        return NoteColumn(
            note=str(d.get("note", "   ")),
            instrument=str(d.get("instrument", "..")),
            volume=str(d.get("volume", "..")),
            panning=str(d.get("panning", "..")),
        )


@dataclass
class EffectColumn:
    number: str = "  "  # 2-char command mnemonic, e.g. 0A, ZT
    value: str = "00"

    present = True

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "value": self.value}

    @staticmethod
    def from_dict(d: dict[str, Any] | None) -> "EffectSlot":
        if d is None:
            return EMPTY
        return EffectColumn(number=str(d.get("number", "  ")), value=str(d.get("value", "00")))


NoteSlot = Union[NoteColumn, EmptyColumn]
EffectSlot = Union[EffectColumn, EmptyColumn]


@dataclass
class Line:
    """One sparse row of a pattern track.

    `index` is the 0-based row; column lists may be shorter than the track's
    visible column counts.
    """

    index: int
    note_columns: list[NoteSlot] = field(default_factory=list)
    effect_columns: list[EffectSlot] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "note_columns": [c.to_dict() for c in self.note_columns],
            "effect_columns": [c.to_dict() for c in self.effect_columns],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Line":
        return Line(
            index=int(d["index"]),
            note_columns=[NoteColumn.from_dict(x) for x in d.get("note_columns", []) or []],
            effect_columns=[EffectColumn.from_dict(x) for x in d.get("effect_columns", []) or []],
        )


@dataclass
class PatternTrack:
    type: str = "PatternTrack"
    # -1 means the track owns its lines; >= 0 points at another pattern.
    alias_pattern_index: int = -1
    lines: list[Line] = field(default_factory=list)

    @property
    def is_alias(self) -> bool:
        return self.alias_pattern_index >= 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "alias_pattern_index": self.alias_pattern_index,
            "lines": [ln.to_dict() for ln in self.lines],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PatternTrack":
        return PatternTrack(
            type=str(d.get("type", "PatternTrack")),
            alias_pattern_index=int(d.get("alias_pattern_index", -1)),
            lines=[Line.from_dict(x) for x in d.get("lines", []) or []],
        )


@dataclass
class Pattern:
    number_of_lines: int
    tracks: list[PatternTrack] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "number_of_lines": self.number_of_lines,
            "tracks": [t.to_dict() for t in self.tracks],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Pattern":
        return Pattern(
            number_of_lines=int(d["number_of_lines"]),
            tracks=[PatternTrack.from_dict(x) for x in d.get("tracks", []) or []],
        )


@dataclass
class PatternPool:
    patterns: list[Pattern] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"patterns": [p.to_dict() for p in self.patterns]}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PatternPool":
        return PatternPool(patterns=[Pattern.from_dict(x) for x in d.get("patterns", []) or []])


@dataclass
class Track:
    name: str
    color: str = ""
    state: str = "Active"

    number_of_visible_note_columns: int = 1
    number_of_visible_effect_columns: int = 0
    volume_column_is_visible: bool = False
    panning_column_is_visible: bool = False
    # Loaded and kept for completeness; not part of the rendered layout.
    delay_column_is_visible: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color,
            "state": self.state,
            "number_of_visible_note_columns": self.number_of_visible_note_columns,
            "number_of_visible_effect_columns": self.number_of_visible_effect_columns,
            "volume_column_is_visible": self.volume_column_is_visible,
            "panning_column_is_visible": self.panning_column_is_visible,
            "delay_column_is_visible": self.delay_column_is_visible,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Track":
        return Track(
            name=str(d.get("name", "")),
            color=str(d.get("color", "")),
            state=str(d.get("state", "Active")),
            number_of_visible_note_columns=int(d.get("number_of_visible_note_columns", 1)),
            number_of_visible_effect_columns=int(d.get("number_of_visible_effect_columns", 0)),
            volume_column_is_visible=bool(d.get("volume_column_is_visible", False)),
            panning_column_is_visible=bool(d.get("panning_column_is_visible", False)),
            delay_column_is_visible=bool(d.get("delay_column_is_visible", False)),
        )


@dataclass
class GlobalSongData:
    beats_per_min: int = 120
    lines_per_beat: int = 4  # drives row highlighting
    ticks_per_line: int = 12

    song_name: str = ""
    artist: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "beats_per_min": self.beats_per_min,
            "lines_per_beat": self.lines_per_beat,
            "ticks_per_line": self.ticks_per_line,
            "song_name": self.song_name,
            "artist": self.artist,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "GlobalSongData":
        return GlobalSongData(
            beats_per_min=int(d.get("beats_per_min", 120)),
            lines_per_beat=int(d.get("lines_per_beat", 4)),
            ticks_per_line=int(d.get("ticks_per_line", 12)),
            song_name=str(d.get("song_name", "") or ""),
            artist=str(d.get("artist", "") or ""),
        )


@dataclass
class SequenceEntry:
    pattern: int
    section_name: str = ""
    muted_tracks: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "section_name": self.section_name,
            "muted_tracks": list(self.muted_tracks),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SequenceEntry":
        return SequenceEntry(
            pattern=int(d["pattern"]),
            section_name=str(d.get("section_name", "") or ""),
            muted_tracks=[int(x) for x in d.get("muted_tracks", []) or []],
        )


@dataclass
class PatternSequence:
    sequence_entries: list[SequenceEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"sequence_entries": [e.to_dict() for e in self.sequence_entries]}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "PatternSequence":
        return PatternSequence(
            sequence_entries=[SequenceEntry.from_dict(x) for x in d.get("sequence_entries", []) or []]
        )


@dataclass
class Song:
    """A song as far as pattern rendering is concerned.

    Track position is shared: `tracks[i]` configures the layout of
    `pattern.tracks[i]` in every pattern of the pool.
    """

    global_song_data: GlobalSongData = field(default_factory=GlobalSongData)
    tracks: list[Track] = field(default_factory=list)
    pattern_pool: PatternPool = field(default_factory=PatternPool)
    pattern_sequence: PatternSequence = field(default_factory=PatternSequence)

    @property
    def patterns(self) -> list[Pattern]:
        return self.pattern_pool.patterns

    def pattern(self, index: int) -> Pattern:
        return self.pattern_pool.patterns[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "global_song_data": self.global_song_data.to_dict(),
            "tracks": [t.to_dict() for t in self.tracks],
            "pattern_pool": self.pattern_pool.to_dict(),
            "pattern_sequence": self.pattern_sequence.to_dict(),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Song":
        return Song(
            global_song_data=GlobalSongData.from_dict(d.get("global_song_data", {}) or {}),
            tracks=[Track.from_dict(x) for x in d.get("tracks", []) or []],
            pattern_pool=PatternPool.from_dict(d.get("pattern_pool", {}) or {}),
            pattern_sequence=PatternSequence.from_dict(d.get("pattern_sequence", {}) or {}),
        )
