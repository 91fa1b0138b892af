import sys
from pathlib import Path

import mido
import pytest

# Add src to path so the tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))


def write_tempo_map_midi(path: Path) -> Path:
    """120 BPM, 3/4, dropping to 60 BPM at tick 1440; notes at ticks 0 and 2880"""
    mid = mido.MidiFile(ticks_per_beat=480)

    conductor = mido.MidiTrack()
    mid.tracks.append(conductor)
    conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(120), time=0))
    conductor.append(
        mido.MetaMessage("time_signature", numerator=3, denominator=4, time=0)
    )
    conductor.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(60), time=1440))
    conductor.append(mido.MetaMessage("end_of_track", time=0))

    notes = mido.MidiTrack()
    mid.tracks.append(notes)
    notes.append(mido.Message("note_on", note=60, velocity=100, time=0))
    notes.append(mido.Message("note_off", note=60, velocity=0, time=480))
    notes.append(mido.Message("note_on", note=62, velocity=100, time=2400))
    # note_on with velocity 0 is a note off
    notes.append(mido.Message("note_on", note=62, velocity=0, time=480))
    notes.append(mido.MetaMessage("end_of_track", time=0))

    mid.save(str(path))
    return path


@pytest.fixture
def tempo_map_midi(tmp_path):
    return write_tempo_map_midi(tmp_path / "Tempo Map.mid")
