"""
Module execution entry point.

Allows running with: python -m battleship_cli
"""

import sys
from battleship_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
