"""Node kinds for the feature graph."""

from enum import Enum


class NodeKind(str, Enum):
    """Kinds of nodes in the feature graph."""

    FEATURE = "feature"  # Declared in the document
    MISSING = "missing"  # Only referenced by an edge endpoint
