# ConfigHelper Output Module
# Rich console output

from confighelper.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
