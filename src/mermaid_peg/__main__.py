"""CLI entry point for mermaid-peg."""

import logging
import sys

import click

from mermaid_peg.config import GraphConfig, ParseConfig
from mermaid_peg.ir.graph import GraphIR
from mermaid_peg.parsers import try_parse
from mermaid_peg.parsers.registry import default_registry
from mermaid_peg.types import DiagramKind

logger = logging.getLogger(__name__)


def _read(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


@click.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--type", "-t", "dialect", type=str, default=None, help="Skip detection and parse as this diagram type")
@click.option("--list-types", "list_types", is_flag=True, help="List the supported diagram types and exit")
@click.option("--graph", "show_graph", is_flag=True, help="Print node and edge counts of the graph description")
@click.option("--lenient", is_flag=True, help="Leave dangling references for is_valid() instead of failing")
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline steps to stderr")
def main(
    files: tuple[str, ...],
    dialect: str | None,
    list_types: bool,
    show_graph: bool,
    lenient: bool,
    verbose: bool,
) -> None:
    """Check Mermaid diagram files and report what they contain."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(name)s: %(message)s")

    if list_types:
        for kind in default_registry.known_types():
            click.echo(kind.value)
        return

    if dialect is not None:
        try:
            DiagramKind.from_name(dialect)
        except ValueError as e:
            click.echo(f"error: {e}", err=True)
            sys.exit(2)

    config = ParseConfig(strict_references=not lenient)
    failed = 0
    for path in files or (None,):
        name = path or "<stdin>"
        try:
            text = _read(path)
        except OSError as e:
            click.echo(f"error: cannot read '{name}': {e}", err=True)
            failed += 1
            continue

        result = try_parse(text, dialect, config)
        if not result.ok:
            click.echo(f"{name}: {result.error}", err=True)
            failed += 1
            continue

        model = result.unwrap()
        status = "valid" if model.is_valid() else "invalid"
        line = f"{name}: {model.diagram_type().value} ({status})"
        if show_graph:
            try:
                gir = GraphIR.from_model(model, GraphConfig())
            except ValueError as e:
                logger.debug("no graph for %s: %s", name, e)
            else:
                line += f" nodes={gir.node_count()} edges={gir.edge_count()}"
        click.echo(line)
        if not model.is_valid():
            failed += 1

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
