"""CLI entry point for mdx-docs."""

import logging
from pathlib import Path

import click

from mdx_docs.config import get_settings
from mdx_docs.openapi.errors import OpenApiError
from mdx_docs.openapi.swagger import parse_openapi
from mdx_docs.parser.document import parse_document
from mdx_docs.parser.markdown import extract_headers
from mdx_docs.parser.syntax import highlight_code


def _emit(text: str, output: Path | None):
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Saved to {output}")


@click.group()
@click.option("--log-level", default=None, help="Logging level (defaults to MDX_DOCS_LOG_LEVEL).")
def main(log_level: str | None):
    """mdx-docs: parse Mintlify-style MDX pages and OpenAPI specs."""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "markdown"]), help="Output format.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write to a file instead of stdout.")
def parse(doc_path: Path, fmt: str, output: Path | None):
    """Parse an MDX page into its document tree."""
    doc = parse_document(doc_path.read_text(encoding="utf-8"))
    if fmt == "markdown":
        _emit(doc.raw_markdown, output)
    else:
        _emit(doc.model_dump_json(indent=2, by_alias=True), output)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def headers(doc_path: Path):
    """Print the table of contents of a page."""
    doc = parse_document(doc_path.read_text(encoding="utf-8"))
    for anchor, title, level in extract_headers(doc.raw_markdown):
        indent = "  " * (level - 2)
        click.echo(f"{indent}- {title} (#{anchor})")


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--base-url", default=None, help="Server URL for curl examples.")
@click.option("--curl", is_flag=True, help="Print a curl command for each operation.")
def openapi(spec_path: Path, base_url: str | None, curl: bool):
    """List the operations of an OpenAPI spec."""
    try:
        spec = parse_openapi(spec_path.read_text(encoding="utf-8"))
    except OpenApiError as e:
        raise click.ClickException(str(e)) from e

    if base_url is None:
        base_url = spec.servers[0].url if spec.servers else get_settings().default_base_url

    click.echo(f"{spec.info.title} {spec.info.version}")
    click.echo(f"Found {len(spec.operations)} operations.")
    for op in spec.operations:
        summary = f"  {op.summary}" if op.summary else ""
        click.echo(f"{op.method.value:<7} {op.path}  [{op.slug()}]{summary}")
        if curl:
            click.echo(op.generate_curl(base_url))
            click.echo()


@main.command()
@click.argument("code_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", default=None, help="Language name or alias, e.g. py, ts, sh.")
def highlight(code_path: Path, language: str | None):
    """Print syntax-highlighted HTML for a source file."""
    click.echo(highlight_code(code_path.read_text(encoding="utf-8"), language))
