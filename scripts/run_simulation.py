"""
Main simulation runner script.

Usage:
    python scripts/run_simulation.py [configs/default_config.yaml] [--headless]

Equivalent to the installed ``asciigrav`` command.
"""

import sys
from pathlib import Path

# Add src to path so we can import asciigrav without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from asciigrav.cli import main


if __name__ == '__main__':
    sys.exit(main())
