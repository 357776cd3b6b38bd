"""``incidentio-mcp tools`` — show the tool catalog the server exposes."""

from __future__ import annotations

import click

from incidentio_mcp.cli_commands._output import print_tools_json, print_tools_table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list payload.")
def tools(as_json: bool) -> None:
    """List the tools and their argument schemas.

    No configuration is needed; nothing is sent.
    """
    from incidentio_mcp.alerts.sink import DryRunAlertSink
    from incidentio_mcp.server import build_default_catalog

    catalog = build_default_catalog(DryRunAlertSink())
    if as_json:
        print_tools_json(catalog.descriptors())
    else:
        print_tools_table(catalog.descriptors())
