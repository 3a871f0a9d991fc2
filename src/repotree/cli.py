"""CLI for repotree."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .client import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_LISTING_TIMEOUT,
    HttpxContentFetcher,
    get_token,
)
from .downloader import RepositoryDownloader
from .exceptions import RepoTreeError
from .translator import ApiPrefix, generate_content_listing_url, parse_browser_url

logger = logging.getLogger(__name__)


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def default_output_dir(browser_url: str) -> Path:
    """Current directory for blob URLs, else the last path segment or repository name."""
    locator = parse_browser_url(browser_url)
    if locator.ref_type == "blob":
        return Path(".")
    if locator.relative_path:
        return Path(locator.relative_path.rsplit("/", 1)[-1])
    return Path(locator.repo)


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.option(
    "--api-prefix",
    envvar="REPOTREE_API_PREFIX",
    help="API host template containing {HOST}",
)
@click.option("--enterprise", is_flag=True, help=f"Use the {ApiPrefix.ENTERPRISE_GITHUB_V3} prefix")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(
    ctx: click.Context,
    token: str | None,
    use_gh_cli: bool,
    api_prefix: str | None,
    enterprise: bool,
    verbose: int,
) -> None:
    """Download files and directories from GitHub repositories."""
    load_dotenv()
    setup_logging(verbose)
    if api_prefix is None:
        api_prefix = ApiPrefix.ENTERPRISE_GITHUB_V3 if enterprise else ApiPrefix.DEFAULT_GITHUB
    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["use_gh_cli"] = use_gh_cli
    ctx.obj["api_prefix"] = api_prefix


@cli.command()
@click.argument("browser_url")
@click.pass_context
def url(ctx: click.Context, browser_url: str) -> None:
    """Print the contents API URL for BROWSER_URL."""
    try:
        click.echo(generate_content_listing_url(browser_url, ctx.obj["api_prefix"]))
    except RepoTreeError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument("browser_url")
@click.option("-o", "--output-dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--timeout", type=float, default=DEFAULT_LISTING_TIMEOUT, show_default=True,
              help="Contents API timeout (seconds)")
@click.option("--download-timeout", type=float, default=DEFAULT_DOWNLOAD_TIMEOUT,
              show_default=True, help="File download timeout (seconds)")
@click.pass_context
def download(
    ctx: click.Context,
    browser_url: str,
    output_dir: Path | None,
    timeout: float,
    download_timeout: float,
) -> None:
    """Download the file or directory at BROWSER_URL."""
    token = get_token(ctx.obj["token"], use_gh_cli=ctx.obj["use_gh_cli"])
    if not token:
        raise click.UsageError("A token is required: pass --token, set GITHUB_TOKEN or use --use-gh-cli")

    try:
        target = output_dir or default_output_dir(browser_url)
        downloader = RepositoryDownloader(
            token,
            ctx.obj["api_prefix"],
            fetcher=HttpxContentFetcher(listing_timeout=timeout, download_timeout=download_timeout),
        )
        total = downloader.download(browser_url, target)
    except RepoTreeError as e:
        logger.error("Download failed: %s", e)
        raise click.ClickException(str(e)) from e

    click.echo(f"Downloaded {total} file(s) to {target}")


if __name__ == "__main__":
    cli()
