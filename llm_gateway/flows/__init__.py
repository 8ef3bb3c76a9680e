from llm_gateway.flows.llm_node import LLMNode
from llm_gateway.flows.node import NodeBase, NodeCategory, NodeConfig
from llm_gateway.flows.runner import run_llm_node, run_node

__all__ = ["LLMNode", "NodeBase", "NodeCategory", "NodeConfig", "run_llm_node", "run_node"]
