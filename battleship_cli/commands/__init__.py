"""
CLI command modules.
"""

from battleship_cli.commands import prove, serve

__all__ = ["prove", "serve"]
