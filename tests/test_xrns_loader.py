from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from xrns_render.errors import SongFormatError
from xrns_render.io.song_json import load_song_json, save_song
from xrns_render.io.xrns import load_song, load_song_xml, load_xrns
from xrns_render.model.types import EMPTY, EffectColumn, NoteColumn

SONG_XML = """<?xml version="1.0" encoding="UTF-8"?>
<RenoiseSong doc_version="63">
  <GlobalSongData>
    <BeatsPerMin>135</BeatsPerMin>
    <LinesPerBeat>4</LinesPerBeat>
    <TicksPerLine>6</TicksPerLine>
    <SongName>Test Song</SongName>
    <Artist>Someone</Artist>
  </GlobalSongData>
  <Tracks>
    <SequencerTrack type="SequencerTrack">
      <Name>Drums</Name>
      <Color>0,0,0</Color>
      <State>Active</State>
      <NumberOfVisibleNoteColumns>2</NumberOfVisibleNoteColumns>
      <NumberOfVisibleEffectColumns>1</NumberOfVisibleEffectColumns>
      <VolumeColumnIsVisible>true</VolumeColumnIsVisible>
      <PanningColumnIsVisible>false</PanningColumnIsVisible>
      <DelayColumnIsVisible>false</DelayColumnIsVisible>
    </SequencerTrack>
    <SequencerMasterTrack type="SequencerMasterTrack">
      <Name>Master</Name>
      <Color>0,0,0</Color>
      <State>Active</State>
      <NumberOfVisibleNoteColumns>0</NumberOfVisibleNoteColumns>
      <NumberOfVisibleEffectColumns>1</NumberOfVisibleEffectColumns>
      <VolumeColumnIsVisible>false</VolumeColumnIsVisible>
      <PanningColumnIsVisible>false</PanningColumnIsVisible>
      <DelayColumnIsVisible>True</DelayColumnIsVisible>
    </SequencerMasterTrack>
  </Tracks>
  <PatternPool>
    <Patterns>
      <Pattern>
        <NumberOfLines>64</NumberOfLines>
        <Tracks>
          <PatternTrack type="PatternTrack">
            <AliasPatternIndex>-1</AliasPatternIndex>
            <Lines>
              <Line index="0">
                <NoteColumns>
                  <NoteColumn>
                    <Note>C-4</Note>
                    <Instrument>00</Instrument>
                  </NoteColumn>
                  <NoteColumn/>
                </NoteColumns>
                <EffectColumns>
                  <EffectColumn>
                    <Value>80</Value>
                    <Number>0S</Number>
                  </EffectColumn>
                </EffectColumns>
              </Line>
              <Line index="16">
                <EffectColumns>
                  <EffectColumn/>
                </EffectColumns>
              </Line>
            </Lines>
          </PatternTrack>
          <PatternMasterTrack type="PatternMasterTrack">
            <AliasPatternIndex>-1</AliasPatternIndex>
          </PatternMasterTrack>
        </Tracks>
      </Pattern>
      <Pattern>
        <NumberOfLines>32</NumberOfLines>
        <Tracks>
          <PatternTrack type="PatternTrack">
            <AliasPatternIndex>0</AliasPatternIndex>
          </PatternTrack>
          <PatternMasterTrack type="PatternMasterTrack">
            <AliasPatternIndex>-1</AliasPatternIndex>
            <Lines/>
          </PatternMasterTrack>
        </Tracks>
      </Pattern>
    </Patterns>
  </PatternPool>
  <PatternSequence>
    <SequenceEntries>
      <SequenceEntry>
        <Pattern>0</Pattern>
        <SectionName>Intro</SectionName>
        <MutedTracks>
          <MutedTrack>1</MutedTrack>
        </MutedTracks>
      </SequenceEntry>
      <SequenceEntry>
        <Pattern>1</Pattern>
      </SequenceEntry>
      <SequenceEntry/>
    </SequenceEntries>
  </PatternSequence>
</RenoiseSong>
"""


def _write_xrns(path: Path, xml: str = SONG_XML) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("Song.xml", xml)
    return path


def test_load_xrns_reads_song_model(tmp_path: Path) -> None:
    song = load_xrns(_write_xrns(tmp_path / "song.xrns"))

    gsd = song.global_song_data
    assert (gsd.beats_per_min, gsd.lines_per_beat, gsd.ticks_per_line) == (135, 4, 6)
    assert (gsd.song_name, gsd.artist) == ("Test Song", "Someone")

    assert [t.name for t in song.tracks] == ["Drums", "Master"]
    drums, master = song.tracks
    assert drums.number_of_visible_note_columns == 2
    assert drums.volume_column_is_visible is True
    assert drums.panning_column_is_visible is False
    assert master.delay_column_is_visible is True

    assert [p.number_of_lines for p in song.patterns] == [64, 32]
    pt = song.pattern(0).tracks[0]
    assert pt.type == "PatternTrack"
    assert not pt.is_alias
    assert [ln.index for ln in pt.lines] == [0, 16]

    first = pt.lines[0]
    assert first.note_columns == [NoteColumn(note="C-4", instrument="00", volume="..", panning=".."), EMPTY]
    assert first.effect_columns == [EffectColumn(number="0S", value="80")]
    assert pt.lines[1].note_columns == []
    assert pt.lines[1].effect_columns == [EMPTY]

    assert song.pattern(0).tracks[1].lines == []
    assert song.pattern(1).tracks[0].alias_pattern_index == 0

    entries = song.pattern_sequence.sequence_entries
    assert [(e.pattern, e.section_name, e.muted_tracks) for e in entries] == [(0, "Intro", [1]), (1, "", [])]


def test_not_a_zip_is_rejected(tmp_path: Path) -> None:
    bad = tmp_path / "bad.xrns"
    bad.write_bytes(b"definitely not a zip")
    with pytest.raises(SongFormatError, match="not a valid Renoise song"):
        load_xrns(bad)


def test_archive_without_song_xml_is_rejected(tmp_path: Path) -> None:
    p = tmp_path / "empty.xrns"
    with zipfile.ZipFile(p, "w") as zf:
        zf.writestr("Other.xml", "<x/>")
    with pytest.raises(SongFormatError, match="Song.xml"):
        load_xrns(p)


def test_missing_required_tag_is_reported() -> None:
    xml = SONG_XML.replace("<LinesPerBeat>4</LinesPerBeat>", "")
    with pytest.raises(SongFormatError, match="LinesPerBeat"):
        load_song_xml(xml)


def test_malformed_xml_is_rejected() -> None:
    with pytest.raises(SongFormatError):
        load_song_xml("<RenoiseSong><GlobalSongData>")


def test_song_json_round_trip(tmp_path: Path) -> None:
    song = load_xrns(_write_xrns(tmp_path / "song.xrns"))
    out = tmp_path / "out" / "song.json"
    save_song(song, out)

    loaded = load_song_json(out)
    assert loaded == song
    assert loaded.pattern(0).tracks[0].lines[0].note_columns[1] is EMPTY
    assert load_song(out) == song


def test_negative_visible_column_count_is_rejected() -> None:
    xml = SONG_XML.replace("<NumberOfVisibleNoteColumns>2<", "<NumberOfVisibleNoteColumns>-1<")
    with pytest.raises(SongFormatError, match="NumberOfVisibleNoteColumns"):
        load_song_xml(xml)


def test_whitespace_only_column_is_present_with_defaults() -> None:
    xml = SONG_XML.replace("<EffectColumn/>", "<EffectColumn> </EffectColumn>")
    song = load_song_xml(xml)
    pt = song.pattern(0).tracks[0]
    assert pt.lines[1].effect_columns == [EffectColumn(number="  ", value="00")]
    assert pt.lines[0].note_columns[1] is EMPTY


def test_missing_files_are_reported_as_format_errors(tmp_path: Path) -> None:
    with pytest.raises(SongFormatError, match="cannot read"):
        load_xrns(tmp_path / "missing.xrns")
    with pytest.raises(SongFormatError):
        load_song_json(tmp_path / "missing.json")
