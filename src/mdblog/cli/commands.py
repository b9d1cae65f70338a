"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.feed import make_channel, read_stylesheets, write_feed
from mdblog.core.formatting import format_post_date, format_reading_time
from mdblog.core.generate import build_content_module, write_content_module
from mdblog.core.models import Post
from mdblog.core.service import MarkdownRenderingService
from mdblog.core.store import ContentStore
from mdblog.errors import FrontmatterValidationError, RenderError
from mdblog.logging_config import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _invalid_content(error: FrontmatterValidationError) -> None:
    """Report an invalid post and stop the build; no partial artifact is written."""
    typer.echo(f"\n❌ {error.message}\n", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _load_posts(settings: Settings) -> tuple[dict, list[Post]]:
    try:
        return build_content_module(Path(settings.content_dir), settings.words_per_minute)
    except FrontmatterValidationError as e:
        _invalid_content(e)
    except (FileNotFoundError, NotADirectoryError) as e:
        _fail(str(e))


def _generate_content(settings: Settings, artifact: dict, posts: list[Post]) -> None:
    out_file = write_content_module(artifact, Path(settings.generated_path))
    typer.echo(f"Generated content module for {len(posts)} file(s) at {out_file}")
    for path in artifact["contentModules"]:
        typer.echo(f"  {path}")


def _generate_feed(settings: Settings, posts: list[Post]) -> None:
    channel = make_channel(settings.production_url, settings.site_title, settings.site_description)
    rss_path, html_path = write_feed(
        posts,
        Path(settings.public_dir),
        channel,
        max_items=settings.max_rss_items,
        stylesheets=read_stylesheets(settings.stylesheets),
    )
    count = min(len(posts), settings.max_rss_items)
    typer.echo(f"Generated RSS feed with {count} item(s) at {rss_path}")
    typer.echo(f"Generated HTML preview at {html_path}")


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    log_json: Annotated[bool, typer.Option("--log-json", help="Emit logs as JSON lines")] = False,
    ):
    """Markdown blog content pipeline."""
    configure_logging(verbose=verbose, log_json=log_json)


def generate_content_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Blog content directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Generated content artifact path")] = None,
    ):
    """Discover and validate posts, then write the generated content artifact."""
    settings = _settings(overrides={"content_dir": content, "generated_path": out})
    typer.echo("Discovering markdown files...")
    artifact, posts = _load_posts(settings)
    _generate_content(settings, artifact, posts)


def generate_feed_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Blog content directory")] = None,
    public: Annotated[Optional[str], typer.Option("--public-dir", help="Output directory for rss.xml")] = None,
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Production base URL for links")] = None,
    max_items: Annotated[Optional[int], typer.Option("--max-items", help="Max feed items")] = None,
    ):
    """Write rss.xml and rss-viewer.html from the validated posts."""
    settings = _settings(overrides={
        "content_dir": content, "public_dir": public,
        "production_url": base_url, "max_rss_items": max_items,
    })
    _, posts = _load_posts(settings)
    _generate_feed(settings, posts)


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Blog content directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Generated content artifact path")] = None,
    public: Annotated[Optional[str], typer.Option("--public-dir", help="Output directory for rss.xml")] = None,
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Production base URL for links")] = None,
    ):
    """Run both build steps: content artifact, then feed."""
    settings = _settings(overrides={
        "content_dir": content, "generated_path": out,
        "public_dir": public, "production_url": base_url,
    })
    artifact, posts = _load_posts(settings)
    _generate_content(settings, artifact, posts)
    _generate_feed(settings, posts)


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file")],
    out: Annotated[Optional[Path], typer.Option("--out", help="Write HTML here instead of stdout")] = None,
    ):
    """Render a markdown file to sanitized HTML."""
    settings = _settings()
    service = MarkdownRenderingService.from_settings(settings)
    try:
        rendered = service.render(path.read_text(encoding="utf-8"))
    except RenderError as e:
        _fail(e.message, e.cause)
    if out is None:
        typer.echo(rendered.html)
    else:
        out.write_text(rendered.html, encoding="utf-8")
        typer.echo(f"  {path} -> {out}")


def list_cmd(
    generated: Annotated[Optional[str], typer.Option("--generated", help="Generated content artifact path")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", help="Show at most this many posts")] = None,
    ):
    """List posts from the generated content artifact, newest first."""
    settings = _settings(overrides={"generated_path": generated})
    artifact = Path(settings.generated_path)
    if not artifact.exists():
        _fail(f"No generated content at {artifact}. Run 'mdblog generate-content' first.")
    try:
        store = ContentStore.from_file(artifact)
    except ValueError as e:
        _fail(str(e))
    posts = store.all_posts(limit)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for post in posts:
        typer.echo(
            f"{post.topic}/{post.slug}  {format_post_date(post.date)}  "
            f"{format_reading_time(post.reading_time)}  {post.title}"
        )
