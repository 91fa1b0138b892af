#!/usr/bin/env python3
"""
Tempo map handling for the beat grid converter
Normalizes tempo / time signature change lists and converts ticks to seconds
"""

import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from ma3beatgrid.core.logger import log_warning


DEFAULT_BPM = 120.0
DEFAULT_NUMERATOR = 4
DEFAULT_DENOMINATOR = 4


@dataclass(frozen=True)
class TempoChange:
    """Tempo in effect from ``tick`` until the next change"""

    tick: int
    bpm: float

    def __repr__(self):
        return f"TempoChange({self.bpm:g} BPM @ tick {self.tick})"


@dataclass(frozen=True)
class TimeSignatureChange:
    """Time signature in effect from ``tick`` until the next change"""

    tick: int
    numerator: int
    denominator: int

    def __repr__(self):
        return f"TimeSignatureChange({self.numerator}/{self.denominator} @ tick {self.tick})"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)"""
    return int(math.floor(value + 0.5))


def seconds_per_tick(bpm: float, ppq: int) -> float:
    us_per_quarter = 60000000 / bpm
    return (us_per_quarter / 1e6) / ppq


def _coerce_tempo(entry: Any) -> TempoChange:
    if isinstance(entry, TempoChange):
        return entry
    if isinstance(entry, dict):
        return TempoChange(int(entry["tick"]), float(entry["bpm"]))
    tick, bpm = entry
    return TempoChange(int(tick), float(bpm))


def _coerce_time_signature(entry: Any) -> TimeSignatureChange:
    if isinstance(entry, TimeSignatureChange):
        return entry
    if isinstance(entry, dict):
        return TimeSignatureChange(
            int(entry["tick"]), int(entry["numerator"]), int(entry["denominator"])
        )
    tick, numerator, denominator = entry
    return TimeSignatureChange(int(tick), int(numerator), int(denominator))


def _collapse_duplicate_ticks(changes: Iterable) -> list:
    """Sort by tick (stable) and keep only the last change at each tick"""
    collapsed = []
    for change in sorted(changes, key=lambda c: c.tick):
        if collapsed and collapsed[-1].tick == change.tick:
            collapsed[-1] = change
        else:
            collapsed.append(change)
    return collapsed


def normalize_tempos(
    raw_tempos: Iterable[Any],
    default_bpm: float = DEFAULT_BPM,
    round_bpm: bool = False,
) -> List[TempoChange]:
    """Return a tick-ordered tempo list that always starts at tick 0.

    Entries may be ``(tick, bpm)`` tuples, ``{"tick", "bpm"}`` dicts or
    TempoChange instances. Non-positive tempos are dropped (with a warning)
    rather than raising, so a badly tagged file still yields a grid.
    """
    tempos = []
    for entry in raw_tempos or []:
        change = _coerce_tempo(entry)
        if round_bpm and math.isfinite(change.bpm):
            change = TempoChange(change.tick, float(round_half_up(change.bpm)))
        if change.tick < 0 or not math.isfinite(change.bpm) or change.bpm <= 0:
            log_warning(f"Ignoring invalid tempo change {change!r}", component="tempo")
            continue
        tempos.append(change)

    tempos = _collapse_duplicate_ticks(tempos)
    if not tempos:
        tempos.append(TempoChange(0, float(default_bpm)))
    if tempos[0].tick != 0:
        tempos.insert(0, TempoChange(0, tempos[0].bpm))
    return tempos


def normalize_time_signatures(raw_signatures: Iterable[Any]) -> List[TimeSignatureChange]:
    """Return a tick-ordered time signature list that always starts at tick 0 (4/4 by default)"""
    signatures = []
    for entry in raw_signatures or []:
        change = _coerce_time_signature(entry)
        if change.tick < 0 or change.numerator <= 0 or change.denominator <= 0:
            log_warning(
                f"Ignoring invalid time signature change {change!r}", component="tempo"
            )
            continue
        signatures.append(change)

    signatures = _collapse_duplicate_ticks(signatures)
    if not signatures:
        signatures.append(
            TimeSignatureChange(0, DEFAULT_NUMERATOR, DEFAULT_DENOMINATOR)
        )
    if signatures[0].tick != 0:
        first = signatures[0]
        signatures.insert(0, TimeSignatureChange(0, first.numerator, first.denominator))
    return signatures


def _latest_at(changes: Sequence, tick: int):
    # Ticks before the first change resolve to the first change
    index = bisect_right([c.tick for c in changes], tick) - 1
    return changes[max(index, 0)]


def tempo_at_tick(tick: int, tempos: Sequence[TempoChange]) -> TempoChange:
    """Latest tempo change with ``change.tick <= tick``"""
    return _latest_at(tempos, tick)


def time_signature_at_tick(
    tick: int, signatures: Sequence[TimeSignatureChange]
) -> TimeSignatureChange:
    """Latest time signature change with ``change.tick <= tick``"""
    return _latest_at(signatures, tick)


def ticks_to_seconds(target_tick: int, tempos: Sequence[TempoChange], ppq: int) -> float:
    """Elapsed seconds from tick 0 to ``target_tick``.

    Sums every tempo segment ``[change.tick, next.tick)`` that starts before
    ``target_tick``; the last one is cut off at ``target_tick``.
    """
    seconds = 0.0
    for i, segment in enumerate(tempos):
        if target_tick <= segment.tick:
            break
        next_tick = tempos[i + 1].tick if i + 1 < len(tempos) else None
        segment_end = target_tick if next_tick is None else min(next_tick, target_tick)
        seconds += (segment_end - segment.tick) * seconds_per_tick(segment.bpm, ppq)
        if next_tick is None or target_tick <= next_tick:
            break
    return seconds
