#!/usr/bin/env python3
"""
User Interface Components for the beat grid converter
Provides the interactive command prompt and beat table display
"""

import shlex
from typing import Dict, Any, Callable, Optional

from ma3beatgrid.core.beat_grid import ConversionResult


class CommandInterface:
    """Command-line prompt that dispatches to registered handlers"""

    def __init__(self, app_name: str = "BeatGrid"):
        self.app_name = app_name
        self.commands: Dict[str, Dict[str, Any]] = {}
        self.running = False

    def register_command(self, name: str, handler: Callable, description: str) -> None:
        """Register a command handler"""
        self.commands[name] = {"handler": handler, "description": description}

    def show_help(self) -> None:
        """Display available commands"""
        print(f"\n=== {self.app_name} ===")
        print("Commands:")
        for name, info in self.commands.items():
            print(f"  {name:<12} - {info['description']}")
        print("  help         - Show this help message")
        print("  quit         - Exit program")

    def execute(self, user_input: str) -> bool:
        """Run one command line; returns False when the user asked to quit"""
        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            ErrorDisplay.show_error("Could not parse command", str(e))
            return True

        if not parts:
            return True

        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ["quit", "exit", "q"]:
            return False
        elif cmd == "help":
            self.show_help()
        elif cmd in self.commands:
            try:
                self.commands[cmd]["handler"](*args)
            except Exception as e:
                ErrorDisplay.show_error(f"Error executing command '{cmd}'", str(e))
        else:
            print("Unknown command. Type 'help' for available commands.")
        return True

    def run(self) -> None:
        """Run the command interface"""
        self.running = True
        self.show_help()

        try:
            while self.running:
                try:
                    user_input = input(f"\n{self.app_name.lower()}> ").strip()
                except EOFError:
                    break
                if not self.execute(user_input):
                    break
        except KeyboardInterrupt:
            pass
        finally:
            self.running = False
            print(f"\n👋 Goodbye from {self.app_name}!")


class BeatTableDisplay:
    """Displays conversion results"""

    @staticmethod
    def show_summary(result: ConversionResult) -> None:
        print(f"✅ Successfully parsed {result.beat_count} total beats from MIDI file")

    @staticmethod
    def show_preview(result: ConversionResult, limit: int = 200) -> None:
        """Print the first ``limit`` rows of the beat table"""
        total = result.beat_count
        shown = min(limit, total)
        print(f"\nPreview (first {shown} of {total} total beats)")
        print(f"{'#':>6}  {'Seconds':>10}  {'Downbeat?':>9}  {'Tempo Change':>12}")
        for row in result.rows(limit):
            print(
                f"{row['index']:>6}  {row['seconds']:>10}  {row['downbeat']:>9}  {row['tempo']:>12}"
            )
        if total > shown:
            print(
                f"... and {total - shown} more beats (all will be included in the export)"
            )

    @staticmethod
    def show_tempo_map(result: ConversionResult) -> None:
        """Display the normalized tempo map behind a result"""
        print(f"\n=== Tempo map: {result.name or 'untitled'} ===")
        print(f"PPQ: {result.ppq}")
        print(f"Grid extent: tick {result.max_tick}")
        print(f"\nTempo changes: {len(result.tempos)}")
        for change in result.tempos:
            print(f"  tick {change.tick:>8}: {change.bpm:g} BPM")
        print(f"\nTime signatures: {len(result.time_signatures)}")
        for change in result.time_signatures:
            print(f"  tick {change.tick:>8}: {change.numerator}/{change.denominator}")
        print(
            f"\nBeats: {result.beat_count} ({result.downbeat_count} downbeats, "
            f"{result.tempo_change_count} tempo markers, ends at {result.duration_seconds:.3f}s)"
        )

    @staticmethod
    def show_session_status(
        result: Optional[ConversionResult], last_error: Optional[str]
    ) -> None:
        print("\n=== BeatGrid Status ===")
        if result is None:
            print("No MIDI file converted yet")
        else:
            print(f"Current file: {result.name or 'untitled'}")
            print(f"Beats: {result.beat_count}")
        if last_error:
            print(f"Last error: {last_error}")


class ErrorDisplay:
    """Displays error messages and warnings"""

    @staticmethod
    def show_error(message: str, details: str = "") -> None:
        """Display error message"""
        print(f"❌ ERROR: {message}")
        if details:
            print(f"   Details: {details}")

    @staticmethod
    def show_warning(message: str) -> None:
        """Display warning message"""
        print(f"⚠️  WARNING: {message}")

    @staticmethod
    def show_success(message: str) -> None:
        """Display success message"""
        print(f"✅ SUCCESS: {message}")
