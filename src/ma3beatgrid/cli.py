#!/usr/bin/env python3
"""
Beat Grid Tools - turn a tempo map MIDI file into a grandMA3 beat grid plugin

Usage:
    beatgrid convert song.mid [-o "song Beat Importer.xml"]
    beatgrid preview song.mid [--rows 50]
    beatgrid json song.mid [-o beats.json]
    beatgrid inspect song.mid
    beatgrid interactive
"""

import argparse
import sys
from typing import List, Optional

from ma3beatgrid.config import ConfigManager, ConfigurationError
from ma3beatgrid.core.logger import (
    enable_system_logging,
    log_error,
    log_file_paths,
    log_info,
)
from ma3beatgrid.export import ExportError, export_beat_table_json, export_plugin
from ma3beatgrid.midi import MidiError
from ma3beatgrid.ui import BeatTableDisplay, ConverterSession, ErrorDisplay, convert_file


def cmd_convert(args, config: ConfigManager) -> None:
    """Convert MIDI file to plugin XML"""
    result = convert_file(args.input_file, config)
    BeatTableDisplay.show_summary(result)
    path = export_plugin(
        result,
        args.output,
        chunk_size=config.chunk_size,
        **config.plugin_options,
    )
    print(f"✅ Converted {args.input_file} to {path}")


def cmd_preview(args, config: ConfigManager) -> None:
    """Print the beat table"""
    result = convert_file(args.input_file, config)
    BeatTableDisplay.show_summary(result)
    BeatTableDisplay.show_preview(result, args.rows or config.preview_rows)


def cmd_json(args, config: ConfigManager) -> None:
    """Convert MIDI file to a JSON beat table"""
    result = convert_file(args.input_file, config)
    output = args.output or f"{result.name or 'tempo-map'}.json"
    path = export_beat_table_json(result, output)
    print(f"✅ Converted {args.input_file} to {path}")
    print(f"   Found {result.beat_count} beats")


def cmd_inspect(args, config: ConfigManager) -> None:
    """Show the tempo map of a MIDI file"""
    result = convert_file(args.input_file, config)
    print(f"📁 File: {args.input_file}")
    BeatTableDisplay.show_tempo_map(result)


def cmd_interactive(args, config: ConfigManager) -> None:
    session = ConverterSession(config)
    if args.input_file:
        session.load(args.input_file)
    session.run()


COMMANDS = {
    "convert": cmd_convert,
    "preview": cmd_preview,
    "json": cmd_json,
    "inspect": cmd_inspect,
    "interactive": cmd_interactive,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tempo map MIDI file -> grandMA3 beat grid plugin creator"
    )
    parser.add_argument(
        "command",
        choices=list(COMMANDS),
        help="Command to execute",
    )
    parser.add_argument("input_file", nargs="?", help="Input .mid file")
    parser.add_argument("-o", "--output", help="Output file path")
    parser.add_argument("--rows", type=int, help="Rows to show in preview")
    parser.add_argument("--config", help="Path to beatgrid.ini")
    parser.add_argument(
        "--round-bpm",
        action="store_true",
        help="Round tempos to whole BPM before computing beat times",
    )
    parser.add_argument("--debug", action="store_true", help="Enable system logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigManager(args.config)
    except ConfigurationError as e:
        ErrorDisplay.show_error(str(e))
        return 1

    enable_system_logging(args.debug or config.enable_system_logging)
    if args.debug:
        print(f"📝 Logging to {log_file_paths()['system']}")
    if args.round_bpm:
        config.set("round_bpm", "true")

    if args.command != "interactive" and not args.input_file:
        ErrorDisplay.show_error("Select a .mid file")
        build_parser().print_usage()
        return 1

    log_info(f"Running '{args.command}' on {args.input_file}", component="cli")
    try:
        COMMANDS[args.command](args, config)
    except (MidiError, ExportError) as e:
        log_error(str(e), component="cli")
        ErrorDisplay.show_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\n👋 Interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
