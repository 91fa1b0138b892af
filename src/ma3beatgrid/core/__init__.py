"""Core tempo map and beat grid components"""

from .source import MidiSource
from .tempo_map import (
    TempoChange,
    TimeSignatureChange,
    normalize_tempos,
    normalize_time_signatures,
    ticks_to_seconds,
    tempo_at_tick,
    time_signature_at_tick,
)
from .beat_grid import (
    Beat,
    ConversionResult,
    convert,
    generate_beat_grid,
    format_seconds_from_ms,
)

__all__ = [
    'MidiSource',
    'TempoChange', 'TimeSignatureChange',
    'normalize_tempos', 'normalize_time_signatures',
    'ticks_to_seconds', 'tempo_at_tick', 'time_signature_at_tick',
    'Beat', 'ConversionResult', 'convert', 'generate_beat_grid',
    'format_seconds_from_ms',
]
