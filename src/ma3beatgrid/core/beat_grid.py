#!/usr/bin/env python3
"""
Beat grid generation for the beat grid converter
Walks a MIDI tempo map one quarter note at a time and produces the beat table
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ma3beatgrid.core.logger import log_debug, log_info
from ma3beatgrid.core.source import MidiSource
from ma3beatgrid.core.tempo_map import (
    DEFAULT_BPM,
    TempoChange,
    TimeSignatureChange,
    normalize_tempos,
    normalize_time_signatures,
    round_half_up,
    seconds_per_tick,
    tempo_at_tick,
    ticks_to_seconds,
    time_signature_at_tick,
)


DEFAULT_PPQ = 480
TRAILING_BEATS = 4


def format_seconds_from_ms(ms: int) -> str:
    """Format milliseconds the way the console plugin expects: 500 -> ".5", 10000 -> "10" """
    trimmed = re.sub(r"\.?0+$", "", f"{ms / 1000:.3f}")
    if trimmed == "":
        return "0"
    return trimmed[1:] if trimmed.startswith("0.") else trimmed


@dataclass(frozen=True)
class Beat:
    """One quarter-note grid position"""

    tick: int
    time_ms: int
    is_downbeat: bool
    tempo: Optional[float] = None  # None means "unchanged since previous beat"

    @property
    def seconds(self) -> float:
        return self.time_ms / 1000

    @property
    def downbeat_flag(self) -> int:
        return 1 if self.is_downbeat else 0

    @property
    def tempo_value(self) -> int:
        """Tempo annotation as written to the beat table (0 when unchanged)"""
        if not self.tempo:
            return 0
        return round_half_up(self.tempo)

    def to_row(self, index: int) -> Dict[str, Any]:
        return {
            "index": index,
            "tick": self.tick,
            "ms": self.time_ms,
            "seconds": format_seconds_from_ms(self.time_ms),
            "downbeat": self.downbeat_flag,
            "tempo": self.tempo_value,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one MIDI file; replaced wholesale on the next conversion"""

    name: str
    ppq: int
    tempos: Tuple[TempoChange, ...]
    time_signatures: Tuple[TimeSignatureChange, ...]
    beats: Tuple[Beat, ...]
    max_tick: int

    @property
    def beat_count(self) -> int:
        return len(self.beats)

    @property
    def downbeat_count(self) -> int:
        return sum(1 for beat in self.beats if beat.is_downbeat)

    @property
    def tempo_change_count(self) -> int:
        return sum(1 for beat in self.beats if beat.tempo is not None)

    @property
    def duration_seconds(self) -> float:
        return self.beats[-1].seconds if self.beats else 0.0

    def rows(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Numbered table rows (1-based), optionally only the first ``limit``"""
        beats = self.beats if limit is None else self.beats[:limit]
        return [beat.to_row(i + 1) for i, beat in enumerate(beats)]


def find_max_tick(source: MidiSource, tempos: Sequence[TempoChange], ppq: int) -> int:
    """Furthest note-on tick; falls back to the declared duration for note-less files"""
    max_tick = max((tick for track in source.note_ticks for tick in track), default=0)
    max_tick = max(max_tick, 0)

    duration = source.duration
    if max_tick == 0 and duration is not None and math.isfinite(duration):
        max_tick = max(math.ceil(duration / seconds_per_tick(tempos[0].bpm, ppq)), 0)
    return max_tick


def beat_in_measure(
    tick: int, signatures: Sequence[TimeSignatureChange], ppq: int
) -> int:
    """0-based position of ``tick`` within its measure"""
    signature = time_signature_at_tick(tick, signatures)
    beats_since_change = (tick - signature.tick) // ppq
    return beats_since_change % signature.numerator


def walk_grid(
    ppq: int,
    tempos: Sequence[TempoChange],
    signatures: Sequence[TimeSignatureChange],
    max_tick: int,
) -> List[Beat]:
    """Emit one Beat per quarter note until a full measure past ``max_tick``"""
    beats: List[Beat] = []
    previous_tempo = None

    last_index = math.ceil(max_tick / ppq) + TRAILING_BEATS
    for i in range(last_index + 1):
        tick = i * ppq
        # Measure length comes from the signature at this beat, not at max_tick
        signature = time_signature_at_tick(tick, signatures)
        if tick > max_tick + ppq * signature.numerator:
            break

        time_ms = round_half_up(ticks_to_seconds(tick, tempos, ppq) * 1000)
        is_downbeat = beat_in_measure(tick, signatures, ppq) == 0

        # Only whole-BPM changes count; sub-BPM jitter is not a new tempo
        current_tempo = tempo_at_tick(tick, tempos).bpm
        whole_bpm = round_half_up(current_tempo)
        changed = previous_tempo is None or whole_bpm != previous_tempo
        previous_tempo = whole_bpm

        beats.append(Beat(tick, time_ms, is_downbeat, current_tempo if changed else None))

    return beats


def _prepare(
    source: MidiSource, default_ppq: int, default_bpm: float, round_bpm: bool
) -> Tuple[int, List[TempoChange], List[TimeSignatureChange], int]:
    ppq = source.ppq if source.ppq and source.ppq > 0 else default_ppq
    tempos = normalize_tempos(source.tempos, default_bpm=default_bpm, round_bpm=round_bpm)
    signatures = normalize_time_signatures(source.time_signatures)
    max_tick = find_max_tick(source, tempos, ppq)
    log_debug(
        f"ppq={ppq} tempos={tempos} time_signatures={signatures} max_tick={max_tick}",
        component="beatgrid",
    )
    return ppq, tempos, signatures, max_tick


def generate_beat_grid(
    source: MidiSource,
    default_ppq: int = DEFAULT_PPQ,
    default_bpm: float = DEFAULT_BPM,
    round_bpm: bool = False,
) -> List[Beat]:
    """Turn a decoded MIDI file into its ordered beat list (never empty)"""
    ppq, tempos, signatures, max_tick = _prepare(source, default_ppq, default_bpm, round_bpm)
    return walk_grid(ppq, tempos, signatures, max_tick)


def convert(
    source: MidiSource,
    default_ppq: int = DEFAULT_PPQ,
    default_bpm: float = DEFAULT_BPM,
    round_bpm: bool = False,
) -> ConversionResult:
    """Run the full tempo map -> beat grid pipeline"""
    ppq, tempos, signatures, max_tick = _prepare(source, default_ppq, default_bpm, round_bpm)
    beats = walk_grid(ppq, tempos, signatures, max_tick)

    result = ConversionResult(
        name=source.name,
        ppq=ppq,
        tempos=tuple(tempos),
        time_signatures=tuple(signatures),
        beats=tuple(beats),
        max_tick=max_tick,
    )
    log_info(
        f"Generated {result.beat_count} beats for '{source.name or 'untitled'}' "
        f"({result.tempo_change_count} tempo markers, {result.duration_seconds:.3f}s)",
        component="beatgrid",
    )
    return result
