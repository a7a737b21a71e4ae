"""CLI entrypoint: Typer app definition and command registration"""

import typer

from doclayout.cli.commands import analyze_cmd, blocks_cmd


app = typer.Typer(name="doclayout", no_args_is_help=True, help="Document layout analysis pipeline")

app.command(name="analyze")(analyze_cmd)
app.command(name="blocks")(blocks_cmd)
