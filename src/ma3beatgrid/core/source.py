#!/usr/bin/env python3
"""
Decoded MIDI data as read by the beat grid generator
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class MidiSource:
    """Everything the beat grid needs from a decoded MIDI file.

    ppq: ticks per quarter note from the header (0 when unknown)
    tempos: ``(tick, bpm)`` pairs in file order
    time_signatures: ``(tick, numerator, denominator)`` triples in file order
    note_ticks: absolute note-on ticks, one list per track
    duration: total length in seconds, when the decoder knows it
    name: display name, usually the file name without extension
    """

    ppq: int = 0
    tempos: List[Tuple[int, float]] = field(default_factory=list)
    time_signatures: List[Tuple[int, int, int]] = field(default_factory=list)
    note_ticks: List[List[int]] = field(default_factory=list)
    duration: Optional[float] = None
    name: str = ""

    @property
    def note_count(self) -> int:
        return sum(len(track) for track in self.note_ticks)
