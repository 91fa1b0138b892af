"""MIDI file reading package for the beat grid converter"""

from .reader import MidiError, load_midi_file, midi_source_from_mido, display_name

__all__ = ["MidiError", "load_midi_file", "midi_source_from_mido", "display_name"]
