"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import (
    build_cmd,
    generate_content_cmd,
    generate_feed_cmd,
    list_cmd,
    main_callback,
    render_cmd,
)


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Markdown blog content pipeline")

app.callback()(main_callback)
app.command(name="build")(build_cmd)
app.command(name="generate-content")(generate_content_cmd)
app.command(name="generate-feed")(generate_feed_cmd)
app.command(name="render")(render_cmd)
app.command(name="list")(list_cmd)
