"""领域层模型与异常。

包含：
- models: BackendConfig / ChatExchange / InvocationResult / ResponseEnvelope。
- exceptions: 业务异常类型定义。
"""
