"""Tempo map MIDI file -> grandMA3 beat grid plugin converter"""

__version__ = "0.1.0"
