"""LangGraph construction for hosting workflow nodes."""

from __future__ import annotations

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from llm_gateway.flows.node import NodeBase
from llm_gateway.flows.state import NodeState


def node_step(state: NodeState, node: NodeBase) -> NodeState:
    return {"output": node.call(state.get("input") or {})}


def build_node_graph(node: NodeBase) -> CompiledStateGraph:
    graph = StateGraph(NodeState)
    graph.add_node(node.node_name, lambda s: node_step(s, node))
    graph.set_entry_point(node.node_name)
    graph.add_edge(node.node_name, END)
    return graph.compile()
