"""Beat table serialization package (Lua script, base64 blocks, plugin XML)"""

from .encoding import (
    normalize_line_endings,
    count_line_endings,
    encode_base64,
    split_into_base64_blocks,
    decode_base64_blocks,
)
from .lua import build_lua_script, build_beat_rows
from .plugin import (
    ExportError,
    build_plugin,
    build_plugin_xml,
    export_plugin,
    export_beat_table_json,
    plugin_file_name,
)
from .template import TemplateEngine

__all__ = [
    "normalize_line_endings", "count_line_endings", "encode_base64",
    "split_into_base64_blocks", "decode_base64_blocks",
    "build_lua_script", "build_beat_rows",
    "ExportError", "build_plugin", "build_plugin_xml", "export_plugin",
    "export_beat_table_json", "plugin_file_name",
    "TemplateEngine",
]
