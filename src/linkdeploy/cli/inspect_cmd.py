"""linkdeploy contracts / link — offline inspection commands."""

from __future__ import annotations

from typing import List, Optional

import typer


def contracts_cmd() -> None:
    """List known contracts, their env var names and predeployed addresses."""
    from linkdeploy.cli.app import get_context
    from linkdeploy.contracts.cache import Contracts
    from linkdeploy.utils.formatters import print_contracts

    print_contracts(Contracts.from_deployed(get_context().ensure_config().deployed))


def link_cmd(
    template: str = typer.Argument(..., help="Embedded template name (e.g. LightClient)"),
    lib: Optional[List[str]] = typer.Option(None, "--lib", "-l", help="QUALIFIED_NAME=ADDRESS, repeatable"),
) -> None:
    """Link an embedded template and print the resulting bytecode."""
    from linkdeploy.contracts.address import Address
    from linkdeploy.errors import DeployError
    from linkdeploy.linking.linker import link_libraries
    from linkdeploy.linking.templates import available_templates, load_template
    from linkdeploy.utils.formatters import print_error

    libraries: dict[str, Address] = {}
    for item in lib or []:
        name, sep, value = item.rpartition("=")
        if not sep or not name:
            print_error(f"Expected QUALIFIED_NAME=ADDRESS, got {item!r}")
            raise typer.Exit(2)
        try:
            libraries[name] = Address.from_hex(value)
        except ValueError as exc:
            print_error(str(exc))
            raise typer.Exit(2)

    try:
        resolved = link_libraries(load_template(template), libraries)
    except DeployError as exc:
        print_error(str(exc))
        if template not in available_templates():
            typer.echo(f"Available templates: {', '.join(available_templates())}", err=True)
        raise typer.Exit(1)

    typer.echo(resolved.hex)
