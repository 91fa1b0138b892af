#!/usr/bin/env python3
"""
Lua plugin script generation
Fills the bundled grandMA3 beat grid plugin with the beat table
"""

from typing import Optional, Sequence

from ma3beatgrid.core.beat_grid import Beat, format_seconds_from_ms
from ma3beatgrid.export.encoding import normalize_line_endings
from ma3beatgrid.export.template import TemplateEngine


PLUGIN_TEMPLATE = "beat_grid_plugin.lua"

_default_engine: Optional[TemplateEngine] = None


def _engine() -> TemplateEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine


def escape_lua_string(value: str) -> str:
    return value.replace('"', '\\"')


def format_beat_row(beat: Beat) -> str:
    """``{seconds,downbeat,tempoOrZero}``"""
    return f"{{{format_seconds_from_ms(beat.time_ms)},{beat.downbeat_flag},{beat.tempo_value}}}"


def build_beat_rows(beats: Sequence[Beat]) -> str:
    """Body of the Lua ``beatTable``, one indented row per beat"""
    last = len(beats) - 1
    return "\r\n".join(
        f"    {format_beat_row(beat)}{',' if i < last else ''}"
        for i, beat in enumerate(beats)
    )


def build_lua_script(
    beats: Sequence[Beat], name: str, engine: Optional[TemplateEngine] = None
) -> str:
    """Complete plugin script with CRLF line endings"""
    engine = engine or _engine()
    script = engine.render(
        PLUGIN_TEMPLATE,
        {"filename": escape_lua_string(name), "beat_rows": build_beat_rows(beats)},
    )
    return normalize_line_endings(script)
