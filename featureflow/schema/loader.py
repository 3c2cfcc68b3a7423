"""JSON/YAML import and export for feature flow graphs."""

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import ValidationError

from .errors import GraphLoadError, GraphValidationError
from .models import FlowGraph, RuleValue

logger = logging.getLogger(__name__)

GraphFormat = Literal["json", "yaml"]

YAML_SUFFIXES = {".yaml", ".yml"}


def format_for_path(path: str | Path) -> GraphFormat:
    """Pick a serialization format from a file suffix (JSON unless YAML)."""
    return "yaml" if Path(path).suffix.lower() in YAML_SUFFIXES else "json"


def _parse_text(text: str, fmt: GraphFormat, path: str | None = None) -> Any:
    try:
        if fmt == "yaml":
            return yaml.safe_load(text)
        return json.loads(text) if text.strip() else None
    except yaml.YAMLError as e:
        raise GraphLoadError(f"Invalid YAML: {e}", path) from e
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Invalid JSON: {e}", path) from e


def load_document(path: str | Path) -> dict:
    """Load a JSON or YAML file and return the raw mapping.

    Args:
        path: Path to the file. ``.yaml``/``.yml`` is read as YAML,
            everything else as JSON.

    Returns:
        The parsed mapping (empty for an empty file).

    Raises:
        GraphLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise GraphLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise GraphLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphLoadError(f"Cannot read file: {e}", str(path)) from e

    data = _parse_text(text, format_for_path(path), str(path))

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise GraphLoadError(
            f"Expected mapping at root, got {type(data).__name__}", str(path)
        )

    logger.debug("Loaded %s", path)
    return data


def load_graph(path: str | Path) -> FlowGraph:
    """Load and validate a graph file.

    Raises:
        GraphLoadError: If the file cannot be read or parsed.
        GraphValidationError: If the document is structurally incomplete.
    """
    data = load_document(path)
    return _parse_graph_data(data)


def parse_graph_from_string(text: str, fmt: GraphFormat = "json") -> FlowGraph:
    """Parse a JSON or YAML string into a FlowGraph.

    Raises:
        GraphLoadError: If the text cannot be parsed.
        GraphValidationError: If the document is structurally incomplete.
    """
    data = _parse_text(text, fmt)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise GraphLoadError(f"Expected mapping at root, got {type(data).__name__}")

    return _parse_graph_data(data)


def load_context(path: str | Path) -> dict[str, RuleValue]:
    """Load a simulation context (condition name -> value) from a file.

    Raises:
        GraphLoadError: If the file cannot be read, or holds non-scalar values.
    """
    data = load_document(path)
    for name, value in data.items():
        if not isinstance(value, (bool, int, float, str)):
            raise GraphLoadError(
                f"Context value for '{name}' must be text, number or boolean, "
                f"got {type(value).__name__}",
                str(path),
            )
    return {str(name): value for name, value in data.items()}


def dump_graph(graph: FlowGraph, fmt: GraphFormat = "json") -> str:
    """Serialize a graph to JSON or YAML text."""
    data = graph.model_dump(mode="json", exclude_none=True)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2)


def save_graph(graph: FlowGraph, path: str | Path) -> None:
    """Write a graph to disk, choosing the format from the file suffix."""
    path = Path(path)
    try:
        path.write_text(dump_graph(graph, format_for_path(path)), encoding="utf-8")
    except OSError as e:
        raise GraphLoadError(f"Cannot write file: {e}", str(path)) from e
    logger.debug("Saved %d node(s), %d edge(s) to %s", len(graph.nodes), len(graph.edges), path)


def _check_structure(data: dict) -> list[dict]:
    """Check the required fields a graph document must carry."""
    errors: list[dict] = []

    for key in ("nodes", "edges"):
        if not isinstance(data.get(key, []), list):
            errors.append(
                {"loc": key, "msg": f"'{key}' must be a list", "type": "list_type"}
            )
    if errors:
        return errors

    for i, node in enumerate(data.get("nodes", [])):
        if not isinstance(node, dict):
            errors.append({"loc": f"nodes.{i}", "msg": "Node must be a mapping", "type": "dict_type"})
            continue
        label = node.get("data", {}).get("label") if isinstance(node.get("data"), dict) else None
        if not node.get("id") or "position" not in node or label is None:
            errors.append(
                {
                    "loc": f"nodes.{i}",
                    "msg": "Invalid node structure: missing required fields (id, position, data.label)",
                    "type": "missing",
                }
            )

    for i, edge in enumerate(data.get("edges", [])):
        if not isinstance(edge, dict):
            errors.append({"loc": f"edges.{i}", "msg": "Edge must be a mapping", "type": "dict_type"})
            continue
        if not edge.get("id") or not edge.get("source") or not edge.get("target"):
            errors.append(
                {
                    "loc": f"edges.{i}",
                    "msg": "Invalid edge structure: missing required fields (id, source, target)",
                    "type": "missing",
                }
            )

    return errors


def _parse_graph_data(data: dict) -> FlowGraph:
    """Parse raw document data into a FlowGraph.

    Raises:
        GraphValidationError: If the data fails validation.
    """
    errors = _check_structure(data)
    if errors:
        raise GraphValidationError(
            f"Invalid graph structure: {len(errors)} error(s)", errors
        )

    try:
        return FlowGraph.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise GraphValidationError(
            f"Graph validation failed with {len(errors)} error(s)", errors
        ) from e
