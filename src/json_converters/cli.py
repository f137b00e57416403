"""Command-line interface for checking JSON documents against converters."""

import importlib
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .codec import JSONCodec
from .converter import Converter
from .error_handler import ErrorHandler


def load_converter(target: str) -> Converter:
    """
    Import a converter given as ``package.module:attribute``.

    The current working directory is searched first, so modules next to
    the documents being checked can be named directly.

    Raises:
        click.BadParameter: If the target cannot be imported or is not a Converter
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise click.BadParameter(f"expected 'module:attribute', got '{target}'", param_hint="TARGET")

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import module '{module_name}': {e}", param_hint="TARGET")

    converter = module
    for part in attribute.split("."):
        try:
            converter = getattr(converter, part)
        except AttributeError:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attribute}'", param_hint="TARGET")

    if not isinstance(converter, Converter):
        raise click.BadParameter(f"'{target}' is not a Converter", param_hint="TARGET")
    return converter


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """JSON Converters - decode and re-encode JSON with typed converters."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument('target')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(target: str, input_file: Path):
    """Decode INPUT_FILE with the converter TARGET (module:attribute)."""
    converter = load_converter(target)
    codec = JSONCodec()

    result = codec.decode_string(converter, input_file.read_text(encoding='utf-8'))
    if result.success:
        click.echo(f"✅ {input_file} decodes with {converter.description}")
        return

    click.echo(f"❌ {input_file} does not decode with {converter.description}:")
    click.echo(ErrorHandler().describe(result.error))
    sys.exit(1)


@main.command(name="format")
@click.argument('target')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--indent', '-i', default=2, show_default=True, type=click.IntRange(min=0),
              help='Indentation width, 0 for compact output')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output JSON file path (default: stdout)')
def format_command(target: str, input_file: Path, indent: int, output: Optional[Path]):
    """Decode INPUT_FILE with TARGET and write it back out re-encoded."""
    converter = load_converter(target)
    codec = JSONCodec(indent=indent)

    result = codec.decode_string(converter, input_file.read_text(encoding='utf-8'))
    if not result.success:
        click.echo(ErrorHandler().describe(result.error), err=True)
        sys.exit(1)

    text = codec.encode(converter, result.value)
    if output:
        output.write_text(text + "\n", encoding='utf-8')
        click.echo(f"✅ Wrote {output}")
    else:
        click.echo(text)


if __name__ == '__main__':
    main()
