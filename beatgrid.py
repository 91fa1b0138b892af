#!/usr/bin/env python3
"""
Beat grid converter launcher
Runs the command line tool straight from a checkout without installing it
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ma3beatgrid.cli import main


if __name__ == "__main__":
    if len(sys.argv) == 1:
        print("🎼 MA3 Beat Grid Tools")
        print("=" * 40)
        print("Usage examples:")
        print("  python3 beatgrid.py preview song.mid")
        print("  python3 beatgrid.py convert song.mid")
        print("  python3 beatgrid.py json song.mid -o beats.json")
        print("  python3 beatgrid.py inspect song.mid")
        print("  python3 beatgrid.py interactive")
        print("")
        print("Note: MIDI file support requires 'mido' library (pip install mido)")
    else:
        sys.exit(main())
