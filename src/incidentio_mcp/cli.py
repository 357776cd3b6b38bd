"""incidentio-mcp CLI entrypoint."""

from __future__ import annotations

import click

from incidentio_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="incidentio-mcp")
def main() -> None:
    """incidentio-mcp — incident.io alerts as an MCP tool."""


# Register subcommands
from incidentio_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
