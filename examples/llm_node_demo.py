"""Minimal demonstration of the LLM workflow node (gateway must be running)."""

from llm_gateway.flows import run_llm_node

if __name__ == "__main__":
    output = run_llm_node({
        "systemMessage": "你是一个有用的AI助手。",
        "userMessage": "你好，请介绍一下自己。",
        "modelName": "llama3",
        "llmType": "ollama",
        "baseUrl": "11434",
    })
    print("LLM:", output["llmResponse"])
