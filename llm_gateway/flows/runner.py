"""High-level entry point for running a workflow node through LangGraph."""

from __future__ import annotations

from typing import Any, Dict, Optional

from llm_gateway.flows.graph import build_node_graph
from llm_gateway.flows.llm_node import LLMNode
from llm_gateway.flows.node import NodeBase, NodeConfig
from llm_gateway.flows.state import NodeState


def run_node(node: NodeBase, node_input: Dict[str, Any]) -> Dict[str, Any]:
    """Execute ``node`` inside a single-step graph and return its output.

    Node errors (NodeInputError, ProviderError, NetworkError) are not caught here.
    """

    state: NodeState = {"input": dict(node_input), "output": {}}
    result = build_node_graph(node).invoke(state)
    return result.get("output") or {}


def run_llm_node(
    node_input: Dict[str, Any],
    *,
    node_id: str = "llm",
    endpoint_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Convenience wrapper: build an LLMNode and run it.

    Args:
        node_input: systemMessage / userMessage and optional model fields
        node_id: 节点 ID，用于日志
        endpoint_url: 覆盖 settings.llm_endpoint_url
    """

    node = LLMNode(NodeConfig(id=node_id, name="llm"), endpoint_url=endpoint_url)
    return run_node(node, node_input)
