"""User interface package for the beat grid converter"""

from .interface import CommandInterface, BeatTableDisplay, ErrorDisplay
from .session import ConverterSession, convert_file

__all__ = [
    'CommandInterface', 'BeatTableDisplay', 'ErrorDisplay',
    'ConverterSession', 'convert_file',
]
