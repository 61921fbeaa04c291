"""
Battleship CLI

Command-line interface for the Battleship proof API.

Usage:
    python -m battleship_cli serve --port 4001
    python -m battleship_cli prove --username alice --ships-sunk 3 --total-shots 20
    python -m battleship_cli config --init
"""

__version__ = "0.1.0"
