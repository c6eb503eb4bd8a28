"""
Command line interface for the dynamic font loader.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from .core.config import FontSettings
from .core.exceptions import DynamicFontError
from .download.cache import download_font_to
from .download.downloader import DownloadProgress, StreamingDownloader
from .fonts.environment import FontEnvironment
from .fonts.registry import PillowFontRegistry
from .fonts.resource import FontResource

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _settings(ctx: click.Context, cache_dir: Path | None = None) -> FontSettings:
    settings = ctx.obj["settings"]
    if cache_dir is not None:
        settings = settings.model_copy(update={"cache_dir": cache_dir})
    return settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to settings YAML file",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Load fonts from assets, files or URLs with a persistent download cache."""
    try:
        settings = FontSettings.from_yaml(config) if config else FontSettings()
    except DynamicFontError as e:
        raise click.ClickException(str(e)) from e

    _setup_logging("DEBUG" if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("url")
@click.option("--overwrite", is_flag=True, help="Download even if the font is cached")
@click.option(
    "--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Cache directory"
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save to this file instead of the cache directory",
)
@click.pass_context
def fetch(ctx, url, overwrite, cache_dir, output):
    """Download a font into the cache (or to --output)."""
    settings = _settings(ctx, cache_dir)
    progress = DownloadProgress(f"Downloading {url.rsplit('/', 1)[-1]}")

    try:
        if output is not None:
            path = asyncio.run(
                download_font_to(
                    url,
                    output,
                    overwrite=overwrite,
                    on_progress=progress,
                    downloader=StreamingDownloader(settings),
                )
            )
            size = path.stat().st_size
        else:
            env = FontEnvironment.create(settings=settings)
            payload = asyncio.run(
                env.font_cache.get(url, overwrite=overwrite, on_progress=progress)
            )
            path = payload.path
            size = payload.size_bytes
            if payload.cache_error is not None:
                click.echo(f"⚠️  {payload.cache_error}", err=True)
    except DynamicFontError as e:
        logger.exception(f"Download failed: {e}")
        sys.exit(1)
    finally:
        progress.close()

    click.echo(f"✅ {path} ({size} bytes)")


@cli.command()
@click.argument("url")
@click.option(
    "--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Cache directory"
)
@click.pass_context
def status(ctx, url, cache_dir):
    """Show where a URL is cached and whether it has been downloaded."""
    env = FontEnvironment.create(settings=_settings(ctx, cache_dir))
    font = FontResource.url(family=url, url=url)

    try:
        path = font.cache_path(environment=env)
    except DynamicFontError as e:
        raise click.ClickException(str(e)) from e

    downloaded = asyncio.run(font.is_downloaded(environment=env))
    click.echo(f"path: {path}")
    click.echo(f"downloaded: {'yes' if downloaded else 'no'}")


@cli.command()
@click.argument("family")
@click.option("--url", "url", help="Load from a URL (cached)")
@click.option("--file", "filepath", type=click.Path(path_type=Path), help="Load from a file")
@click.option("--asset", "asset_key", help="Load an asset key from --assets-dir")
@click.option(
    "--assets-dir", type=click.Path(file_okay=False, path_type=Path), help="Asset bundle root"
)
@click.option("--overwrite", is_flag=True, help="Download even if the font is cached")
@click.option(
    "--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Cache directory"
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def load(ctx, family, url, filepath, asset_key, assets_dir, overwrite, cache_dir, as_json):
    """Load FAMILY from exactly one of --url, --file or --asset."""
    sources = [value for value in (url, filepath, asset_key) if value is not None]
    if len(sources) != 1:
        raise click.UsageError("Give exactly one of --url, --file or --asset")

    settings = _settings(ctx, cache_dir)
    if assets_dir is not None:
        settings = settings.model_copy(update={"assets_dir": assets_dir})

    if url is not None:
        font = FontResource.url(family, url, overwrite=overwrite)
    elif filepath is not None:
        font = FontResource.file(family, filepath)
    else:
        font = FontResource.asset(family, asset_key)

    registry = PillowFontRegistry()
    env = FontEnvironment.create(settings=settings, registry=registry)
    progress = DownloadProgress(f"Loading {family}") if url is not None else None

    try:
        result = asyncio.run(font.load_result(on_progress=progress, environment=env))
    finally:
        if progress is not None:
            progress.close()

    if as_json:
        report = result.to_dict()
        report["renders"] = font.test_loaded(environment=env)
        click.echo(json.dumps(report, indent=2))
    elif result.success:
        click.echo(f"✅ Loaded '{family}' ({result.size_bytes} bytes)")
    else:
        click.echo(f"❌ Failed to load '{family}': {result.error}", err=True)

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    cli()
