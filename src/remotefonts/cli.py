from __future__ import annotations

import json
from pathlib import Path

import click

from .config import load_settings
from .errors import RemoteFontsError
from .manifest import load_manifest
from .models import RemoteFontAsset, cache_mode
from .pipeline import build_resolver, run_manifest
from .util.hashing import sha256_hex
from .util.logging import setup_logging


def _http_options(func):
    func = click.option("--user-agent", type=str, help="Custom user agent")(func)
    func = click.option("--timeout", type=float, help="HTTP timeout in seconds (default: none)")(func)
    func = click.option(
        "--allow-error-status/--strict-status",
        default=None,
        help="Accept 4xx/5xx response bodies as font data",
    )(func)
    func = click.option("--logs-dir", type=click.Path(path_type=str), help="Log directory")(func)
    return func


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main():
    """Fetch remote fonts through a sha256-keyed local cache."""


@main.command()
@click.argument("url")
@click.option("--sha256", "sha256", type=str, help="Expected sha256 of the font file")
@click.option("--cache-dir", type=click.Path(path_type=str), help="Cache directory (requires --sha256)")
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write the font bytes to this file")
@_http_options
def fetch(url, sha256, output, **kwargs):
    """Resolve a single remote font file."""
    try:
        settings = load_settings(kwargs)
        setup_logging(settings.logs_dir, settings.log_level)
        asset = RemoteFontAsset(url, sha256)
        # FONT_CACHE_DIR is only a default for hashed fetches; an explicit --cache-dir is always checked
        cache_dir = settings.cache_dir if sha256 or kwargs.get("cache_dir") else None
        data = build_resolver(settings).resolve(asset, cache_mode(cache_dir))
    except RemoteFontsError as exc:
        raise click.ClickException(str(exc)) from exc
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
    click.echo(
        json.dumps(
            {
                "url": url,
                "bytes": len(data),
                "sha256": sha256_hex(data),
                "output": str(output) if output else None,
            },
            indent=2,
        )
    )


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--cache-dir", type=click.Path(path_type=str), help="Default cache directory")
@click.option("--out", "out_dir", type=click.Path(path_type=str), help="Font install directory")
@click.option("--parallel/--sequential", default=None, help="Load families concurrently")
@click.option("--max-workers", type=int, help="Thread pool size for --parallel")
@_http_options
def load(manifest, **kwargs):
    """Load every font family listed in a JSON manifest."""
    try:
        settings = load_settings(kwargs)
        summary = run_manifest(settings, load_manifest(manifest))
    except RemoteFontsError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(
        json.dumps(
            {
                "families": summary.families,
                "font_files": summary.font_files,
                "cache_dir": summary.cache_dir,
                "parallel": summary.parallel,
            },
            indent=2,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    main()
