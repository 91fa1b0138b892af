#!/usr/bin/env python3
"""
MIDI file reading for the beat grid converter
Decodes .mid files with mido and extracts the tempo map and note positions
"""

import re
from pathlib import Path
from typing import Optional, Union

from ma3beatgrid.core.logger import log_info, log_error
from ma3beatgrid.core.source import MidiSource


# Try to import mido for MIDI file support
try:
    import mido

    MIDI_SUPPORT = True
except ImportError:
    MIDI_SUPPORT = False


__all__ = [
    "MidiError",
    "MIDI_SUPPORT",
    "display_name",
    "load_midi_file",
    "midi_source_from_mido",
]


class MidiError(Exception):
    """Raised when a MIDI file is missing or cannot be decoded"""

    pass


def display_name(path: Union[str, Path]) -> str:
    """File name without a trailing .mid / .midi"""
    return re.sub(r"\.(mid|midi)$", "", Path(path).name, flags=re.IGNORECASE)


def _file_length(midi_file) -> Optional[float]:
    # mido cannot time asynchronous (type 2) files and refuses with ValueError
    try:
        return float(midi_file.length)
    except ValueError:
        return None


def midi_source_from_mido(midi_file, name: str = "") -> MidiSource:
    """Collect tempo, time signature and note-on positions from every track"""
    source = MidiSource(
        ppq=midi_file.ticks_per_beat or 0,
        duration=_file_length(midi_file),
        name=name,
    )

    for track in midi_file.tracks:
        track_ticks = []
        tick = 0
        for msg in track:
            tick += msg.time

            if msg.type == "set_tempo":
                source.tempos.append((tick, mido.tempo2bpm(msg.tempo)))
            elif msg.type == "time_signature":
                source.time_signatures.append((tick, msg.numerator, msg.denominator))
            elif msg.type == "note_on" and msg.velocity > 0:
                track_ticks.append(tick)

        source.note_ticks.append(track_ticks)

    return source


def load_midi_file(midi_path: Optional[Union[str, Path]]) -> MidiSource:
    """Read a .mid file from disk into a MidiSource"""
    if not midi_path:
        raise MidiError("Select a .mid file")

    if not MIDI_SUPPORT:
        raise MidiError("MIDI file support not available - install mido library")

    file_path = Path(midi_path)
    if not file_path.is_file():
        raise MidiError(f"MIDI file not found: {midi_path}")

    try:
        midi_file = mido.MidiFile(str(file_path))
    except Exception as e:
        log_error(f"Could not decode {file_path}: {e}", component="midi")
        raise MidiError(f"Could not decode MIDI file {file_path.name}: {e}") from e

    source = midi_source_from_mido(midi_file, name=display_name(file_path))
    log_info(
        f"Loaded {file_path} (ppq={source.ppq}, tracks={len(source.note_ticks)}, "
        f"notes={source.note_count}, tempos={len(source.tempos)}, "
        f"time_signatures={len(source.time_signatures)})",
        component="midi",
    )
    return source
