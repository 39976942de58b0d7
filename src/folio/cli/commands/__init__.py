"""folio CLI commands."""

from folio.cli.commands.check import CheckCommand
from folio.cli.commands.list_posts import ListCommand
from folio.cli.commands.new import NewCommand
from folio.cli.commands.show import ShowCommand

__all__ = [
    "CheckCommand",
    "ListCommand",
    "NewCommand",
    "ShowCommand",
]
