"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdtree.cli.commands import check_cmd, export_cmd, parse_cmd


app = typer.Typer(name="mdtree", no_args_is_help=True, help="Constrained markdown to a typed document tree")

app.command(name="parse")(parse_cmd)
app.command(name="export")(export_cmd)
app.command(name="check")(check_cmd)
