#!/usr/bin/env python3
"""
Tests for reading MIDI files with mido
"""

import mido
import pytest

from ma3beatgrid.core import convert
from ma3beatgrid.midi import MidiError, display_name, load_midi_file, midi_source_from_mido


def test_load_tempo_map(tempo_map_midi):
    source = load_midi_file(tempo_map_midi)

    assert source.name == "Tempo Map"
    assert source.ppq == 480
    assert [tick for tick, _ in source.tempos] == [0, 1440]
    assert [bpm for _, bpm in source.tempos] == pytest.approx([120.0, 60.0])
    assert source.time_signatures == [(0, 3, 4)]
    assert source.note_ticks == [[], [0, 2880]]
    assert source.note_count == 2
    assert source.duration > 0


def test_convert_loaded_file(tempo_map_midi):
    result = convert(load_midi_file(tempo_map_midi))

    assert result.max_tick == 2880
    assert result.beat_count == 10
    assert [b.time_ms for b in result.beats[:5]] == [0, 500, 1000, 1500, 2500]
    assert result.beats[3].tempo_value == 60
    assert result.beats[-1].time_ms == 7500
    assert [i for i, b in enumerate(result.beats) if b.is_downbeat] == [0, 3, 6, 9]


def test_missing_input_is_reported():
    with pytest.raises(MidiError, match="Select a .mid file"):
        load_midi_file(None)
    with pytest.raises(MidiError, match="Select a .mid file"):
        load_midi_file("")


def test_missing_file(tmp_path):
    with pytest.raises(MidiError, match="not found"):
        load_midi_file(tmp_path / "nope.mid")


def test_garbage_file_is_decode_error(tmp_path):
    bad = tmp_path / "bad.mid"
    bad.write_bytes(b"this is not a midi file at all")
    with pytest.raises(MidiError, match="Could not decode"):
        load_midi_file(bad)


def test_display_name():
    assert display_name("song.mid") == "song"
    assert display_name("/tmp/Song.MIDI") == "Song"
    assert display_name("notes.txt") == "notes.txt"
    assert display_name("a.mid.mid") == "a.mid"


def test_type_2_file_has_no_duration():
    mid = mido.MidiFile(type=2, ticks_per_beat=96)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.Message("note_on", note=64, velocity=90, time=192))

    source = midi_source_from_mido(mid, name="async")
    assert source.duration is None
    assert source.ppq == 96
    assert source.note_ticks == [[192]]
    assert source.tempos == []
