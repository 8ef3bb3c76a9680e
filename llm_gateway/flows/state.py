"""State definition for the node-hosting LangGraph."""

from __future__ import annotations

from typing import Any, Dict, TypedDict


class NodeState(TypedDict, total=False):
    """State passed through the graph: node input in, node output out."""

    input: Dict[str, Any]
    output: Dict[str, Any]
