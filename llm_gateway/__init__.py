"""LLM Gateway 顶层包。

该包把工作流节点发出的对话请求路由到 OpenAI 兼容云端 API 或本地 Ollama 服务，
包括配置校验、Provider 适配、HTTP 接口与工作流节点封装。
"""

from llm_gateway.flows import LLMNode, run_llm_node

__all__ = ["LLMNode", "run_llm_node"]
