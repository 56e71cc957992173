# Repodock Output Module
# Rich console output for sync and docker commands

from repodock.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
