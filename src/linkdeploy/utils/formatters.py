"""Rich output for the linkdeploy CLI.

stdout is reserved for machine-readable output (the ``NAME=0x..`` address
file, linked bytecode), so status lines go to stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from linkdeploy.contracts.cache import Contracts

console = Console()
err_console = Console(stderr=True)


def print_contracts(contracts: Contracts, title: str | None = "Contracts") -> None:
    """One row per known contract: identifier, env var and cached address."""
    from linkdeploy.contracts.ids import Contract

    table = Table(title=title, show_lines=True)
    table.add_column("contract")
    table.add_column("env var", overflow="fold")
    table.add_column("address", overflow="fold")

    for contract in Contract:
        address = contracts.lookup(contract)
        table.add_row(
            contract.name,
            contract.display_name,
            str(address) if address is not None else "[dim]-[/dim]",
        )

    console.print(table)


def print_success(msg: str) -> None:
    err_console.print(f"[bold green]{msg}[/bold green]")


def print_error(msg: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {msg}")
