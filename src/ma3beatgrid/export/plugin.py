#!/usr/bin/env python3
"""
grandMA3 plugin export
Wraps the base64-encoded Lua script in the console's UserPlugin XML and writes
the beat table to disk (plugin XML or JSON)
"""

import json
from pathlib import Path
from typing import Optional, Sequence, Union
from xml.sax.saxutils import escape

from ma3beatgrid.core.beat_grid import ConversionResult
from ma3beatgrid.core.logger import log_info, log_error
from ma3beatgrid.export.encoding import (
    DEFAULT_CHUNK_SIZE,
    count_line_endings,
    split_into_base64_blocks,
)
from ma3beatgrid.export.lua import build_lua_script


DATA_VERSION = "2.3.1.1"
PLUGIN_GUID = "E8 D2 CD 55 D4 92 10 02 8F EA DF B5 EA 2C DA 1F"
COMPONENT_GUID = "E8 D2 CD 55 50 D7 10 02 25 FD 30 BF 10 7D 65 1E"
PLUGIN_AUTHOR = "PJ Carruth"
PLUGIN_VERSION = "0.0.0.0"


class ExportError(Exception):
    """Raised when a beat grid cannot be exported"""

    pass


def plugin_name(name: str) -> str:
    return f"{name or 'Untitled'} Beat Importer"


def plugin_file_name(name: str) -> str:
    return f"{name or 'tempo-map'} Beat Importer.xml"


def _attr(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def build_plugin_xml(
    blocks: Sequence[str],
    name: str,
    author: str = PLUGIN_AUTHOR,
    version: str = PLUGIN_VERSION,
    data_version: str = DATA_VERSION,
    plugin_guid: str = PLUGIN_GUID,
    component_guid: str = COMPONENT_GUID,
) -> str:
    """UserPlugin document with one <Block> per base64 chunk"""
    total_size = sum(len(block) for block in blocks)

    file_content = f'            <FileContent Size="{total_size}">\n'
    for block in blocks:
        file_content += f'                <Block Base64="{block}"/>\n'
    file_content += "            </FileContent>"

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'    <GMA3 DataVersion="{_attr(data_version)}">\n'
        f'        <UserPlugin Name="{_attr(plugin_name(name))}" Guid="{_attr(plugin_guid)}" '
        f'Author="{_attr(author)}" Version="{_attr(version)}">\n'
        f'            <ComponentLua Guid="{_attr(component_guid)}">\n'
        f"    {file_content}\n"
        "            </ComponentLua>\n"
        "        </UserPlugin>\n"
        "    </GMA3>"
    )


def build_plugin(
    result: ConversionResult, chunk_size: int = DEFAULT_CHUNK_SIZE, **xml_options
) -> str:
    """Lua script -> base64 blocks -> plugin XML for a conversion result"""
    if not result.beats:
        raise ExportError("Nothing to export - convert a MIDI file first")

    lua = build_lua_script(result.beats, result.name)
    count_line_endings(lua)
    blocks = split_into_base64_blocks(lua, chunk_size)
    log_info(
        f"Lua script {len(lua)} chars -> {len(blocks)} base64 blocks", component="export"
    )
    return build_plugin_xml(blocks, result.name, **xml_options)


def _write_text(output_path: Path, text: str) -> None:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        log_error(f"Could not write {output_path}: {e}", component="export")
        raise ExportError(f"Could not write {output_path}: {e}") from e


def export_plugin(
    result: ConversionResult,
    output_path: Optional[Union[str, Path]] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    **xml_options,
) -> Path:
    """Write the plugin XML and return where it went"""
    xml = build_plugin(result, chunk_size=chunk_size, **xml_options)
    path = Path(output_path) if output_path else Path(plugin_file_name(result.name))
    _write_text(path, xml)
    log_info(f"Exported {result.beat_count} beats to {path}", component="export")
    return path


def export_beat_table_json(
    result: ConversionResult, output_path: Union[str, Path]
) -> Path:
    """Write the beat table rows as JSON"""
    if not result.beats:
        raise ExportError("Nothing to export - convert a MIDI file first")

    path = Path(output_path)
    _write_text(path, json.dumps(result.rows(), indent=2) + "\n")
    log_info(f"Saved beat table ({result.beat_count} rows) to {path}", component="export")
    return path
