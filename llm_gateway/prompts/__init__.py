"""提示词模板。

- DIALOGUE_PROMPT: Ollama 路径使用的 system + human 两段式模板。
- CHECK_*: 连通性测试使用的固定消息。
"""

from langchain_core.prompts import ChatPromptTemplate


DIALOGUE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_message}"),
    ("human", "{user_message}"),
])

CHECK_SYSTEM_MESSAGE = "You are a helpful AI assistant."
CHECK_USER_MESSAGE = (
    "Hello, this is a test message. Please respond with 'Test successful' if you can read this."
)
# 本地模型对复杂提示词兼容性差，测试时只发最简单的消息
LOCAL_CHECK_MESSAGE = "Hi"
