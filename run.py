#!/usr/bin/env python3
"""
Pocket Bank Entry Point

Starts an interactive teller session on the terminal.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from pocket_bank.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
