from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path

from xrns_render.errors import SongFormatError
from xrns_render.model.types import (
    EMPTY,
    EffectColumn,
    EffectSlot,
    GlobalSongData,
    Line,
    NoteColumn,
    NoteSlot,
    Pattern,
    PatternPool,
    PatternSequence,
    PatternTrack,
    SequenceEntry,
    Song,
    Track,
)

_LOGGER = logging.getLogger("xrns_render.io.xrns")

SONG_MEMBER = "Song.xml"


def _child(node: ET.Element, tag: str) -> ET.Element:
    found = node.find(tag)
    if found is None:
        raise SongFormatError(f"missing <{tag}> in <{node.tag}>")
    return found


def _text(node: ET.Element, tag: str, default: str | None = None) -> str:
    found = node.find(tag)
    if found is None:
        if default is None:
            raise SongFormatError(f"missing <{tag}> in <{node.tag}>")
        return default
    return found.text or ""


def _int(node: ET.Element, tag: str) -> int:
    raw = _text(node, tag).strip()
    try:
        return int(raw)
    except ValueError:
        raise SongFormatError(f"<{tag}> is not an integer: {raw!r}") from None


def _count(node: ET.Element, tag: str) -> int:
    value = _int(node, tag)
    if value < 0:
        raise SongFormatError(f"<{tag}> must be >= 0, got {value}")
    return value


def _has_children(node: ET.Element) -> bool:
    # Any child element or text, whitespace included, makes a slot present.
    return len(node) > 0 or node.text is not None


def _bool(node: ET.Element, tag: str) -> bool:
    raw = _text(node, tag).strip().lower()
    if raw not in {"true", "false"}:
        raise SongFormatError(f"<{tag}> is not a boolean: {raw!r}")
    return raw == "true"


def _elements(node: ET.Element | None, tag: str | None = None) -> list[ET.Element]:
    if node is None:
        return []
    return [c for c in node if tag is None or c.tag == tag]


def _global_song_data(root: ET.Element) -> GlobalSongData:
    gsd = _child(root, "GlobalSongData")
    return GlobalSongData(
        beats_per_min=_int(gsd, "BeatsPerMin"),
        lines_per_beat=_int(gsd, "LinesPerBeat"),
        ticks_per_line=_int(gsd, "TicksPerLine"),
        song_name=_text(gsd, "SongName"),
        artist=_text(gsd, "Artist"),
    )


def _tracks(root: ET.Element) -> list[Track]:
    # Sequencer, group, send and master tracks all occupy a column.
    return [
        Track(
            name=_text(n, "Name"),
            color=_text(n, "Color"),
            state=_text(n, "State"),
            number_of_visible_note_columns=_count(n, "NumberOfVisibleNoteColumns"),
            number_of_visible_effect_columns=_count(n, "NumberOfVisibleEffectColumns"),
            volume_column_is_visible=_bool(n, "VolumeColumnIsVisible"),
            panning_column_is_visible=_bool(n, "PanningColumnIsVisible"),
            delay_column_is_visible=_bool(n, "DelayColumnIsVisible"),
        )
        for n in _elements(_child(root, "Tracks"))
    ]


def _note_columns(line: ET.Element) -> list[NoteSlot]:
    out: list[NoteSlot] = []
    for n in _elements(line.find("NoteColumns"), "NoteColumn"):
        if not _has_children(n):
            out.append(EMPTY)
            continue
        out.append(
            NoteColumn(
                note=_text(n, "Note", "   "),
                instrument=_text(n, "Instrument", ".."),
                volume=_text(n, "Volume", ".."),
                panning=_text(n, "Panning", ".."),
            )
        )
    return out


def _effect_columns(line: ET.Element) -> list[EffectSlot]:
    out: list[EffectSlot] = []
    for n in _elements(line.find("EffectColumns"), "EffectColumn"):
        if not _has_children(n):
            out.append(EMPTY)
            continue
        out.append(EffectColumn(number=_text(n, "Number", "  "), value=_text(n, "Value", "00")))
    return out


def _lines(pattern_track: ET.Element) -> list[Line]:
    out: list[Line] = []
    for n in _elements(pattern_track.find("Lines")):
        raw = n.get("index")
        if raw is None:
            raise SongFormatError("<Line> without index attribute")
        try:
            index = int(raw)
        except ValueError:
            raise SongFormatError(f"<Line> index is not an integer: {raw!r}") from None
        out.append(Line(index=index, note_columns=_note_columns(n), effect_columns=_effect_columns(n)))
    return out


def _pattern_tracks(pattern: ET.Element) -> list[PatternTrack]:
    out: list[PatternTrack] = []
    for n in _elements(_child(pattern, "Tracks")):
        kind = n.get("type")
        if kind is None:
            raise SongFormatError(f"<{n.tag}> without type attribute")
        out.append(PatternTrack(type=kind, alias_pattern_index=_int(n, "AliasPatternIndex"), lines=_lines(n)))
    return out


def _pattern_pool(root: ET.Element) -> PatternPool:
    patterns = _child(_child(root, "PatternPool"), "Patterns")
    return PatternPool(
        patterns=[
            Pattern(number_of_lines=_count(n, "NumberOfLines"), tracks=_pattern_tracks(n))
            for n in _elements(patterns)
        ]
    )


def _pattern_sequence(root: ET.Element) -> PatternSequence:
    seq = _child(root, "PatternSequence")
    entries: list[SequenceEntry] = []
    for n in _elements(seq.find("SequenceEntries"), "SequenceEntry"):
        if not _has_children(n):
            continue
        muted = [
            int((m.text or "").strip())
            for m in _elements(n.find("MutedTracks"), "MutedTrack")
        ]
        entries.append(
            SequenceEntry(pattern=_int(n, "Pattern"), section_name=_text(n, "SectionName", ""), muted_tracks=muted)
        )
    return PatternSequence(sequence_entries=entries)


def load_song_xml(xml_text: str | bytes) -> Song:
    """Parse a Renoise Song.xml document into a Song."""

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise SongFormatError(f"malformed Song.xml: {e}") from e

    try:
        return Song(
            global_song_data=_global_song_data(root),
            tracks=_tracks(root),
            pattern_pool=_pattern_pool(root),
            pattern_sequence=_pattern_sequence(root),
        )
    except ValueError as e:
        raise SongFormatError(f"bad value in Song.xml: {e}") from e


def load_xrns(path: str | Path) -> Song:
    """Read the Song.xml member of an .xrns archive."""

    p = Path(path)
    try:
        with zipfile.ZipFile(p) as zf:
            try:
                data = zf.read(SONG_MEMBER)
            except KeyError:
                raise SongFormatError(f"not a valid Renoise song (no {SONG_MEMBER}): {p}") from None
    except zipfile.BadZipFile as e:
        raise SongFormatError(f"not a valid Renoise song: {p}") from e
    except OSError as e:
        raise SongFormatError(f"cannot read {p}: {e.strerror or e}") from e

    _LOGGER.debug("read %s (%d bytes) from %s", SONG_MEMBER, len(data), p)
    return load_song_xml(data)


def load_song(path: str | Path) -> Song:
    """Load a song from an .xrns archive or a song JSON file."""

    p = Path(path)
    if p.suffix.lower() == ".json":
        from xrns_render.io.song_json import load_song_json

        return load_song_json(p)
    return load_xrns(p)
