import dataclasses
import json
import logging
import os
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from pythonjsonlogger.json import JsonFormatter
from rich.console import Console

from markdown_adf.config import ConverterSettings
from markdown_adf.constants import LOG_FILE_ENV_VAR, LOGGER_NAME
from markdown_adf.converters.adf_to_markdown import adf_to_markdown
from markdown_adf.converters.markdown_to_adf import markdown_to_adf
from markdown_adf.exceptions import ConversionError
from markdown_adf.validators import validate_adf_document

console = Console()
error_console = Console(stderr=True)
logger = logging.getLogger(LOGGER_NAME)


def load_settings() -> ConverterSettings:
    """Load the settings, exiting with a readable message when they are invalid."""
    try:
        return ConverterSettings()
    except FileNotFoundError as e:
        error_console.print(e)
        sys.exit(1)
    except ValidationError as e:
        error_console.print('Configuration validation error. Make sure your config file is correct.')
        for _e in e.errors():
            if location := _e.get('loc'):
                error_console.print(f'Configuration error at {location[0]}: {_e.get("msg")}')
            else:
                error_console.print(f'Configuration error: {_e.get("msg")}')
        sys.exit(1)


def setup_logging(settings: ConverterSettings) -> None:
    logger.setLevel(settings.log_level or logging.WARNING)

    if log_file_name := os.getenv(LOG_FILE_ENV_VAR):
        log_file = Path(log_file_name).resolve()
    elif settings.log_file:
        log_file = Path(settings.log_file).resolve()
    else:
        return

    try:
        fh = logging.FileHandler(log_file)
    except OSError as e:
        error_console.print(f'Failed to create log file handler: {e}')
    else:
        fh.setLevel(settings.log_level or logging.WARNING)
        fh.setFormatter(
            JsonFormatter('%(asctime)s %(levelname)s %(message)s %(lineno)s %(module)s %(pathname)s ')
        )
        logger.addHandler(fh)


def read_json_document(source) -> dict:
    try:
        return json.load(source)
    except json.JSONDecodeError as e:
        error_console.print(f'[bold red]Invalid JSON:[/bold red] {e}')
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    '--version',
    is_flag=True,
    default=False,
    help='Show the version of the tool.',
)
@click.pass_context
def cli(ctx: click.Context, version: bool = False):
    """Converts Markdown to Atlassian Document Format (ADF) and back."""

    if version:
        from importlib.metadata import version as get_version

        console.print(get_version('markdown-adf'))
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        return

    settings = load_settings()
    setup_logging(settings)
    ctx.obj = settings


@cli.command('to-adf')
@click.argument('file', type=click.File('r', encoding='utf-8'), default='-')
@click.option(
    '--no-smart-links',
    is_flag=True,
    default=False,
    help='Keep every link as a regular link instead of converting Atlassian URLs to cards.',
)
@click.option(
    '--validate',
    'validate_output',
    is_flag=True,
    default=False,
    help='Validate the generated document and fail if it is invalid.',
)
@click.option('--indent', default=2, type=int, show_default=True, help='JSON indentation.')
@click.pass_obj
def to_adf(settings: ConverterSettings, file, no_smart_links: bool, validate_output: bool, indent: int):
    """Converts a Markdown FILE (or stdin) to an ADF JSON document."""

    options = settings.markdown_to_adf_options()
    if no_smart_links:
        options = dataclasses.replace(options, enable_smart_links=False)

    logger.debug(f'Converting Markdown to ADF with options {options.as_dict()}')

    try:
        document = markdown_to_adf(file.read(), options)
    except ConversionError as e:
        error_console.print(f'[bold red]Conversion failed:[/bold red] {e}')
        sys.exit(1)

    if validate_output:
        result = validate_adf_document(document)
        if not result.valid:
            for error in result.errors:
                error_console.print(error, style='red', markup=False, highlight=False)
            sys.exit(1)

    click.echo(json.dumps(document, indent=indent or None, ensure_ascii=False))


@cli.command('to-markdown')
@click.argument('file', type=click.File('r', encoding='utf-8'), default='-')
@click.option(
    '--strict',
    is_flag=True,
    default=False,
    help='Fail on nodes that can not be converted instead of skipping them.',
)
@click.pass_obj
def to_markdown(settings: ConverterSettings, file, strict: bool):
    """Converts an ADF JSON document from FILE (or stdin) to Markdown."""

    options = settings.adf_to_markdown_options()
    if strict:
        options = dataclasses.replace(options, strict=True)

    logger.debug(f'Converting ADF to Markdown with options {options.as_dict()}')

    document = read_json_document(file)
    try:
        markdown = adf_to_markdown(document, options)
    except ConversionError as e:
        error_console.print(f'[bold red]Conversion failed:[/bold red] {e}')
        sys.exit(1)

    click.echo(markdown)


@cli.command('validate')
@click.argument('file', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_obj
def validate(settings: ConverterSettings, file):
    """Validates an ADF JSON document from FILE (or stdin)."""

    result = validate_adf_document(read_json_document(file))
    if result.valid:
        console.print('[green]The document is valid.[/green]')
        return

    error_console.print(f'[bold red]The document is invalid ({len(result.errors)} errors):[/bold red]')
    for error in result.errors:
        error_console.print(f'  {error}', markup=False, highlight=False)
    sys.exit(1)


def markdownAdfCLI():
    cli()


if __name__ == '__main__':
    markdownAdfCLI()
