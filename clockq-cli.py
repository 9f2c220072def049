#!/usr/bin/env python3
"""
clockq CLI

Tracks tasks which need doing regularly and shows which ones are due.

Usage:
    ./clockq-cli.py                                  # Show all tasks
    ./clockq-cli.py add "<name>" --frequency 7       # Track a new task
    ./clockq-cli.py did <task> [--on DATE] [-y]      # Mark a task done
    ./clockq-cli.py remove <task> [-y]               # Stop tracking a task
    ./clockq-cli.py list --sort due                  # Most urgent first

Examples:
    # Water the plants every week, starting today
    ./clockq-cli.py add "water plants" --frequency 7 --done

    # Partial names are matched
    ./clockq-cli.py did plants

    # Back-date a completion without being asked to confirm
    ./clockq-cli.py did house --on 2017-01-01 -y
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from clockq import main

if __name__ == '__main__':
    sys.exit(main())
