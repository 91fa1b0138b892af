#!/usr/bin/env python3
"""
Tests for beat grid generation
"""

from mido import bpm2tempo, tempo2bpm

from ma3beatgrid.core import MidiSource
from ma3beatgrid.core.beat_grid import (
    beat_in_measure,
    convert,
    format_seconds_from_ms,
    generate_beat_grid,
)
from ma3beatgrid.core.tempo_map import normalize_time_signatures


def test_constant_tempo_grid():
    source = MidiSource(
        ppq=480,
        tempos=[(0, 120)],
        time_signatures=[(0, 4, 4)],
        note_ticks=[[480 * 16]],
    )
    beats = generate_beat_grid(source)

    # 16 beats of music, a trailing measure, and beat 0 itself
    assert len(beats) == 21
    assert [b.time_ms for b in beats] == [i * 500 for i in range(21)]
    assert [b.tick for b in beats] == [i * 480 for i in range(21)]
    assert [i for i, b in enumerate(beats) if b.is_downbeat] == [0, 4, 8, 12, 16, 20]
    assert beats[0].tempo == 120.0
    assert all(b.tempo is None for b in beats[1:])


def test_tempo_change_annotation():
    source = MidiSource(
        ppq=480,
        tempos=[(0, 120), (1920, 140)],
        note_ticks=[[1920 * 2]],
    )
    beats = generate_beat_grid(source)

    assert beats[0].tempo_value == 120
    assert [b.tempo_value for b in beats[1:4]] == [0, 0, 0]
    assert beats[4].tick == 1920
    assert beats[4].tempo_value == 140
    assert beats[4].time_ms == 2000
    assert beats[5].tempo is None
    # 2s + one beat at 140 BPM
    assert beats[5].time_ms == 2429


def test_sub_bpm_jitter_is_not_a_tempo_change():
    # 140 BPM as stored in a MIDI file, then one microsecond per beat slower
    bpm = tempo2bpm(bpm2tempo(140))
    jittered = tempo2bpm(bpm2tempo(140) + 1)
    source = MidiSource(
        ppq=480,
        tempos=[(0, bpm), (1920, jittered)],
        note_ticks=[[3840]],
    )
    beats = generate_beat_grid(source)

    assert beats[0].tempo_value == 140
    assert beats[4].tick == 1920
    assert beats[4].tempo is None
    assert beats[4].tempo_value == 0
    assert sum(1 for b in beats if b.tempo is not None) == 1


def test_empty_source_gives_minimal_grid():
    beats = generate_beat_grid(MidiSource())

    assert len(beats) == 5
    assert [b.time_ms for b in beats] == [0, 500, 1000, 1500, 2000]
    assert [b.is_downbeat for b in beats] == [True, False, False, False, True]
    assert beats[0].tempo == 120.0


def test_missing_ppq_defaults_to_480():
    beats = generate_beat_grid(MidiSource(ppq=0, note_ticks=[[960]]))
    assert [b.tick for b in beats][:3] == [0, 480, 960]

    beats = generate_beat_grid(MidiSource(ppq=0), default_ppq=96)
    assert beats[1].tick == 96


def test_duration_used_when_there_are_no_notes():
    result = convert(MidiSource(ppq=480, duration=4.0))

    # 4 seconds at 120 BPM is 3840 ticks (float division may round up one tick)
    assert result.max_tick in (3840, 3841)
    assert result.beat_count == 13
    assert result.beats[-1].time_ms == 6000


def test_notes_win_over_duration():
    result = convert(MidiSource(ppq=480, note_ticks=[[960]], duration=100.0))
    assert result.max_tick == 960


def test_max_tick_across_tracks():
    result = convert(MidiSource(ppq=480, note_ticks=[[100, 480], [], [2400, 10]]))
    assert result.max_tick == 2400


def test_time_signature_change_moves_downbeats():
    source = MidiSource(
        ppq=480,
        time_signatures=[(0, 4, 4), (1920, 3, 4)],
        note_ticks=[[480 * 10]],
    )
    beats = generate_beat_grid(source)

    assert len(beats) == 14
    assert [i for i, b in enumerate(beats) if b.is_downbeat] == [0, 4, 7, 10, 13]


def test_downbeats_match_position_in_measure():
    source = MidiSource(
        ppq=96,
        tempos=[(0, 100), (500, 150)],
        time_signatures=[(0, 5, 4), (960, 7, 8), (1700, 2, 4)],
        note_ticks=[[4000]],
    )
    beats = generate_beat_grid(source)
    signatures = normalize_time_signatures(source.time_signatures)

    for beat in beats:
        assert beat.is_downbeat == (beat_in_measure(beat.tick, signatures, 96) == 0)


def test_first_tempo_after_tick_zero_is_extended_back():
    beats = generate_beat_grid(MidiSource(ppq=480, tempos=[(960, 90)]))

    assert beats[0].tempo == 90.0
    assert beats[1].time_ms == 667
    assert all(b.tempo is None for b in beats[1:])


def test_invalid_tempo_falls_back_to_default():
    beats = generate_beat_grid(MidiSource(ppq=480, tempos=[(0, 0)]))
    assert beats[0].tempo == 120.0
    assert beats[1].time_ms == 500


def test_beat_times_strictly_increase():
    source = MidiSource(
        ppq=480,
        tempos=[(0, 200), (1000, 45), (5000, 300)],
        note_ticks=[[9000]],
    )
    beats = generate_beat_grid(source)
    assert all(a.tick < b.tick for a, b in zip(beats, beats[1:]))
    assert all(a.time_ms < b.time_ms for a, b in zip(beats, beats[1:]))


def test_round_bpm_matches_whole_tempo():
    source = MidiSource(ppq=480, tempos=[(0, 119.6)], note_ticks=[[480]])
    assert generate_beat_grid(source)[1].time_ms == 502
    assert generate_beat_grid(source, round_bpm=True)[1].time_ms == 500


def test_conversion_result_rows():
    result = convert(MidiSource(ppq=480, note_ticks=[[480 * 4]], name="song"))

    rows = result.rows()
    assert len(rows) == result.beat_count
    assert rows[0] == {
        "index": 1,
        "tick": 0,
        "ms": 0,
        "seconds": "0",
        "downbeat": 1,
        "tempo": 120,
    }
    assert rows[1]["seconds"] == ".5"
    assert rows[1]["tempo"] == 0
    assert len(result.rows(3)) == 3
    assert result.name == "song"
    assert result.tempo_change_count == 1


def test_format_seconds_from_ms():
    assert format_seconds_from_ms(0) == "0"
    assert format_seconds_from_ms(500) == ".5"
    assert format_seconds_from_ms(5) == ".005"
    assert format_seconds_from_ms(1000) == "1"
    assert format_seconds_from_ms(2429) == "2.429"
    assert format_seconds_from_ms(10000) == "10"
    assert format_seconds_from_ms(60250) == "60.25"
