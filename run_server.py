#!/usr/bin/env python
"""Script to run the taskboard server from a source checkout."""
import sys
from pathlib import Path

# Make the package importable without installing it
script_dir = Path(__file__).resolve().parent
if str(script_dir) not in sys.path:
    sys.path.insert(0, str(script_dir))

from taskboard.server import main

if __name__ == "__main__":
    main()
