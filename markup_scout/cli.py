# === FILE: markup_scout/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of MarkupScout.

Commands:
  crawl     Crawl a live site over HTTP and validate every page
  static    Walk local files mirroring a site and validate every page

Common options:
  --config PATH       YAML/JSON file with default options
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)

Exit status:
  0   success
  64  markup errors
  65  not found errors
  66  markup and not found errors

Example:
  markup-scout crawl --site http://localhost:3000/ --not-found --verbose
  markup-scout static --site http://example.com/ --pattern 'build/**/*.html' --root build
"""
import sys
from pathlib import Path
from typing import Any, Callable

import click

from markup_scout import __version__
from markup_scout.config import load_config
from markup_scout.engine import Engine
from markup_scout.logger import configure as configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by the `crawl` and `static` commands."""
    decorators = [
        click.option('--site', '-s', default=None, help='Site root URL (default: http://localhost:3000/)'),
        click.option('--ignore', '-i', default=None, help='Regex of validation errors to ignore'),
        click.option('--markup/--no-markup', 'markup', default=None, help='Check markup validity (default: on)'),
        click.option('--not-found/--no-not-found', 'not_found', default=None,
                     help='Report links to missing resources (default: off)'),
        click.option('--verbose/--quiet', 'verbose', default=None, help='Print validation errors of failing pages'),
        click.option('--color/--no-color', 'color', default=None, help='Colorize output (default: on)'),
        click.option('--schema-dir', 'schema_dir', default=None,
                     type=click.Path(exists=True, file_okay=False, path_type=Path),
                     help='Directory with <namespace>.xsd / .dtd files'),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='MarkupScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON options file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr when omitted)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Validate the markup and links of a website."""
    configure_logging(log_level, log_file)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _run(ctx: click.Context, mode: str, **overrides: Any) -> None:
    try:
        options = load_config(ctx.obj['config_path'], mode=mode, **overrides)
    except (ValueError, TypeError, FileNotFoundError) as e:
        print_error(f'Invalid configuration: {e}')
    engine = Engine(options)
    status = engine.run()
    ctx.exit(int(status))


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@common_options
@click.option('--exclude', '-e', default=None, help='Regex of URLs never crawled')
@click.option('--user-agent', '-u', 'user_agent', default=None, help='User-Agent header')
@click.option('--cookies', default=None, help='Cookie header, e.g. "a=1; b=2"')
@click.option('--timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option('--no-ping', 'no_ping', is_flag=True, help='Skip the internet connection probe')
@click.pass_context
def crawl(ctx, no_ping, **overrides):
    """Crawl a live site and validate every HTML page."""
    if no_ping:
        overrides['ping_url'] = ''
    _run(ctx, 'crawl', **overrides)


@cli.command('static', context_settings=CONTEXT_SETTINGS)
@common_options
@click.option('--pattern', '-p', default=None, help='Glob of local files (default: **/*.html)')
@click.option('--root', '-r', default=None,
              type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Local directory mirroring the site root (default: current directory)')
@click.pass_context
def static(ctx, **overrides):
    """Validate local files as pages of the site."""
    _run(ctx, 'static', **overrides)


if __name__ == "__main__":
    cli()
