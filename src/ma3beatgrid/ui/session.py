#!/usr/bin/env python3
"""
Interactive conversion session
Keeps the last successful conversion around for preview and export
"""

from pathlib import Path
from typing import Optional

from ma3beatgrid.config import ConfigManager
from ma3beatgrid.core.beat_grid import ConversionResult, convert
from ma3beatgrid.core.logger import log_error
from ma3beatgrid.export import ExportError, export_beat_table_json, export_plugin
from ma3beatgrid.midi import MidiError, load_midi_file
from ma3beatgrid.ui.interface import BeatTableDisplay, CommandInterface, ErrorDisplay


def convert_file(midi_path: Optional[str], config: ConfigManager) -> ConversionResult:
    """Load a .mid file and run the beat grid pipeline with the configured defaults"""
    source = load_midi_file(midi_path)
    return convert(source, **config.conversion_options)


class ConverterSession:
    """Holds the current ConversionResult between commands.

    A failed load or export leaves the previous result untouched and only
    records ``last_error``.
    """

    def __init__(self, config: ConfigManager):
        self.config = config
        self.result: Optional[ConversionResult] = None
        self.last_error: Optional[str] = None

    def _fail(self, error: Exception) -> None:
        self.last_error = str(error)
        log_error(self.last_error, component="session")
        ErrorDisplay.show_error(self.last_error)

    def load(self, midi_path: Optional[str] = None) -> Optional[ConversionResult]:
        """Convert a MIDI file and make it the current result"""
        try:
            result = convert_file(midi_path, self.config)
        except MidiError as e:
            self._fail(e)
            return None

        self.result = result
        self.last_error = None
        BeatTableDisplay.show_summary(result)
        return result

    def _require_result(self) -> ConversionResult:
        if self.result is None:
            raise ExportError("Nothing to export - load a MIDI file first")
        return self.result

    def preview(self, limit: Optional[str] = None) -> None:
        if self.result is None:
            ErrorDisplay.show_warning("No MIDI file loaded")
            return
        rows = int(limit) if limit else self.config.preview_rows
        BeatTableDisplay.show_preview(self.result, rows)

    def inspect(self) -> None:
        if self.result is None:
            ErrorDisplay.show_warning("No MIDI file loaded")
            return
        BeatTableDisplay.show_tempo_map(self.result)

    def export(self, output_path: Optional[str] = None) -> Optional[Path]:
        """Write the plugin XML for the current result"""
        try:
            path = export_plugin(
                self._require_result(),
                output_path,
                chunk_size=self.config.chunk_size,
                **self.config.plugin_options,
            )
        except ExportError as e:
            self._fail(e)
            return None
        ErrorDisplay.show_success(f"Plugin written to {path}")
        return path

    def export_json(self, output_path: Optional[str] = None) -> Optional[Path]:
        """Write the current beat table as JSON"""
        try:
            result = self._require_result()
            path = export_beat_table_json(
                result, output_path or f"{result.name or 'tempo-map'}.json"
            )
        except ExportError as e:
            self._fail(e)
            return None
        ErrorDisplay.show_success(f"Beat table written to {path}")
        return path

    def status(self) -> None:
        BeatTableDisplay.show_session_status(self.result, self.last_error)

    def build_interface(self) -> CommandInterface:
        ui = CommandInterface("BeatGrid")
        ui.register_command("load", self.load, "Convert a .mid file: load <file>")
        ui.register_command("preview", self.preview, "Show beat table: preview [rows]")
        ui.register_command("inspect", self.inspect, "Show the tempo map")
        ui.register_command("export", self.export, "Write plugin XML: export [file]")
        ui.register_command("json", self.export_json, "Write beat table JSON: json [file]")
        ui.register_command("status", self.status, "Show session status")
        return ui

    def run(self) -> None:
        self.build_interface().run()
