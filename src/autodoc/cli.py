import json
import logging

from dataclasses import asdict, replace
from pathlib import Path
from rich.console import Console
from typing import List, Optional

import typer

from autodoc import __version__
from autodoc.config import AutodocConfig, load_config
from autodoc.errors import AutodocError
from autodoc.library import Autodoc
from autodoc.parsers import CodeParser, get_parser_for_file

app = typer.Typer(
    help="Autodoc - API documentation from JSDoc comments",
    no_args_is_help=True,
)

console = Console()


def _read_source(file_path: Path) -> tuple[str, CodeParser]:
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    code_parser = get_parser_for_file(file_path)
    if code_parser is None:
        raise AutodocError(f"Unsupported file type: {file_path.suffix or file_path.name}")

    return file_path.read_text(), code_parser


def _build_config(namespaces: Optional[List[str]], tags: Optional[List[str]]) -> AutodocConfig:
    """Load the .autodoc file from the current directory, applying CLI overrides."""
    config = load_config(Path.cwd())
    if namespaces:
        config = replace(config, namespaces=list(namespaces))
    if tags:
        config = replace(config, tags=list(tags))
    return config


def filter_none(d):
    """Drop None values from nested dicts and lists."""
    if isinstance(d, dict):
        return {k: filter_none(v) for k, v in d.items() if v is not None}
    elif isinstance(d, list):
        return [filter_none(item) for item in d]
    else:
        return d


@app.command()
def parse(
    file_path: Path,
    namespace: Optional[List[str]] = typer.Option(None, "--namespace", "-n", help="Namespace to document"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Only document functions with this tag"),
):
    """Extract documentation data from a JavaScript file as JSON.

    Args:
        file_path: The JavaScript file to document
    """
    try:
        code, code_parser = _read_source(file_path)
        library_info = Autodoc(_build_config(namespace, tag), code_parser).parse(code)
    except (FileNotFoundError, AutodocError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(json.dumps(filter_none(asdict(library_info)), indent=2))


@app.command()
def generate(
    file_path: Path,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the document to this file"),
    template: Optional[Path] = typer.Option(None, "--template", help="Template file to render with"),
    namespace: Optional[List[str]] = typer.Option(None, "--namespace", "-n", help="Namespace to document"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Only document functions with this tag"),
):
    """Generate HTML API docs for a JavaScript file.

    Examples:
        autodoc generate lazy.js -o docs/index.html
        autodoc generate lazy.js --template docs/custom.html
    """
    try:
        code, code_parser = _read_source(file_path)
        config = _build_config(namespace, tag)
        if template is not None:
            config = replace(config, template=template.name, template_dir=template.parent)
        html = Autodoc(config, code_parser).generate(code)
    except (FileNotFoundError, AutodocError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if output is None:
        typer.echo(html)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html)
    console.print(f"Wrote docs for {file_path} to {output}")


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"autodoc version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log skipped comments and config problems"),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
