# === FILE: site_parity/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of SiteParity.

Commands:
  scrape URL          Extract title, content sections and links of one page
  compare OLD NEW     Compare link inventories of an old and a new page
  serve               Run the JSON HTTP service
  config              Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml when present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

Report options (scrape / compare):
  --json PATH         Save a JSON report
  --html PATH         Save an HTML report
  --template DIR      Directory with Jinja2 templates
  --pretty            Indent JSON printed to stdout

Example:
  site-parity compare https://old.example.com https://new.example.com --fail-under 90
"""
import asyncio
import sys
from pathlib import Path

import click

from site_parity import __version__
from site_parity.config import load_config
from site_parity.engine import Engine
from site_parity.errors import SiteParityError
from site_parity.logger import init_logging
from site_parity.models import LinkScope
from site_parity.report.html_report import render_html
from site_parity.report.json_report import render_json
from site_parity.server import run_server

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str, code: int = 1):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


def report_options(func):
    """Options shared by the commands producing a report."""
    func = click.option(
        '--pretty', is_flag=True,
        help='Indent JSON printed to stdout (2 spaces)'
    )(func)
    func = click.option(
        '--template', '-t', 'template_dir',
        default=None,
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        help='Directory with Jinja2 templates (bundled ones by default)'
    )(func)
    func = click.option(
        '--html', 'html_output',
        default=None,
        type=click.Path(writable=True, dir_okay=False, path_type=Path),
        help='Save an HTML report to this file'
    )(func)
    func = click.option(
        '--json', '-j', 'json_output',
        default=None,
        type=click.Path(writable=True, dir_okay=False, path_type=Path),
        help='Save a JSON report to this file'
    )(func)
    return func


def emit(report, json_output, html_output, template_dir, pretty):
    """Print *report* as JSON or write the requested report files."""
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return
    if json_output:
        try:
            click.echo(f'JSON report: {render_json(report, json_output)}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')
    if html_output:
        try:
            click.echo(f'HTML report: {render_html(report, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteParity, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
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
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteParity: page link inventories, content extraction and migration checks."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load config: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--all-links', is_flag=True,
    help='Collect links from the whole page, not only from its content'
)
@report_options
@click.pass_context
def scrape(ctx, url, all_links, json_output, html_output, template_dir, pretty):
    """Extract title, content and links of URL."""
    cfg = ctx.obj['config']
    scope = LinkScope.DOCUMENT if all_links else LinkScope.CONTENT
    try:
        result = asyncio.run(Engine(cfg).scrape(url, scope=scope))
    except SiteParityError as e:
        print_error(str(e))
    emit(result, json_output, html_output, template_dir, pretty)


@cli.command('compare', context_settings=CONTEXT_SETTINGS)
@click.argument('old_url')
@click.argument('new_url')
@click.option(
    '--fail-under', 'fail_under',
    type=click.IntRange(0, 100),
    default=None,
    help='Exit with status 2 when similarity is below this percentage'
)
@report_options
@click.pass_context
def compare(ctx, old_url, new_url, fail_under, json_output, html_output, template_dir, pretty):
    """Compare links of OLD_URL (old site) with NEW_URL (new site)."""
    cfg = ctx.obj['config']
    try:
        report = asyncio.run(Engine(cfg).compare(old_url, new_url))
    except SiteParityError as e:
        print_error(str(e))
    emit(report, json_output, html_output, template_dir, pretty)
    if fail_under is not None and report.similarity < fail_under:
        print_error(f'Similarity {report.similarity}% is below {fail_under}%', code=2)


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Bind address (config value by default)')
@click.option('--port', type=click.IntRange(1, 65535), default=None, help='Port (config value by default)')
@click.pass_context
def serve(ctx, host, port):
    """Run the JSON HTTP service."""
    run_server(ctx.obj['config'], host=host, port=port)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
