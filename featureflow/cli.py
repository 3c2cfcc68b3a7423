"""Command-line interface for featureflow."""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from .output.formatter import (
    format_conditions,
    format_simulation_result,
    format_trace_result,
    format_validation_result,
)
from .schema.errors import GraphLoadError, GraphValidationError
from .schema.models import FlowGraph
from .validators.runner import validate_graph

logger = logging.getLogger(__name__)
err_console = Console(stderr=True)

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    envvar="FEATUREFLOW_FORMAT",
    show_envvar=True,
    help="Output format",
)


def _load_or_exit(graph_file: str) -> FlowGraph:
    """Load a graph, printing the error and exiting with code 2 on failure."""
    from .schema.loader import load_graph

    try:
        return load_graph(graph_file)
    except GraphLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except GraphValidationError as e:
        click.echo(f"Graph validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)


def _parse_assignments(ctx, param, values):
    """Parse repeated NAME=VALUE options into a context mapping."""
    from .engine.rules import parse_value

    assignments = {}
    for item in values:
        name, sep, raw = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'")
        assignments[name.strip()] = parse_value(raw)
    return assignments


@click.group()
@click.version_option(package_name="featureflow")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """featureflow: simulate how a context flows through a feature graph."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
            ),
        ],
    )


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@FORMAT_OPTION
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(graph_file: str, output_format: str, strict: bool):
    """Validate a feature graph file.

    GRAPH_FILE is the path to a JSON or YAML graph file.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or structure error
    """
    flow = _load_or_exit(graph_file)
    result = validate_graph(flow)

    output = format_validation_result(result, output_format)  # type: ignore
    click.echo(output)

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@FORMAT_OPTION
def conditions(graph_file: str, output_format: str):
    """List the conditions used by the graph's rules.

    Each condition is shown with its inferred type and every value seen.
    """
    from .engine.conditions import discover_conditions

    flow = _load_or_exit(graph_file)
    click.echo(format_conditions(discover_conditions(flow.edges), output_format))  # type: ignore


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.option(
    "--set",
    "assignments",
    multiple=True,
    callback=_parse_assignments,
    metavar="NAME=VALUE",
    help="Set a condition value (repeatable); overrides --context-file",
)
@click.option(
    "--context-file",
    type=click.Path(exists=True),
    envvar="FEATUREFLOW_CONTEXT_FILE",
    show_envvar=True,
    help="JSON or YAML mapping of condition values",
)
@FORMAT_OPTION
def simulate(
    graph_file: str,
    assignments: dict,
    context_file: str | None,
    output_format: str,
):
    """Simulate which features are reachable under a context.

    GRAPH_FILE is the path to a JSON or YAML graph file. Conditions that are
    not set place no constraint on any path.

    Exit codes:
      0 - Success
      2 - File or structure error
    """
    from .engine.flow import evaluate_flow
    from .schema.loader import load_context

    flow = _load_or_exit(graph_file)

    state = {}
    if context_file:
        try:
            state.update(load_context(context_file))
        except GraphLoadError as e:
            click.echo(f"Error loading context: {e}", err=True)
            sys.exit(2)
    state.update(assignments)

    logger.debug("Simulating with context %s", state)
    result = evaluate_flow(flow.nodes, flow.edges, state)
    click.echo(format_simulation_result(flow, state, result, output_format))  # type: ignore


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.argument("node_id")
@FORMAT_OPTION
def trace(graph_file: str, node_id: str, output_format: str):
    """Show every node and edge leading to NODE_ID, ignoring rules.

    Exit codes:
      0 - Success
      2 - File error or unknown node
    """
    from .engine.trace import trace_ancestors

    flow = _load_or_exit(graph_file)
    if flow.get_node(node_id) is None:
        click.echo(f"Unknown node: {node_id}", err=True)
        sys.exit(2)

    result = trace_ancestors(node_id, flow.edges)
    click.echo(format_trace_result(flow, node_id, result, output_format))  # type: ignore


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
def convert(graph_file: str, output_file: str):
    """Re-serialize a graph file; the format follows OUTPUT_FILE's suffix."""
    from .schema.loader import save_graph

    flow = _load_or_exit(graph_file)
    try:
        save_graph(flow, output_file)
    except GraphLoadError as e:
        click.echo(f"Error writing file: {e}", err=True)
        sys.exit(2)

    click.echo(f"Wrote {len(flow.nodes)} node(s) and {len(flow.edges)} edge(s) to {output_file}")


if __name__ == "__main__":
    main()
