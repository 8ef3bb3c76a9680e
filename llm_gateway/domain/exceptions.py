"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 HTTP 层统一转换为 {success: false, error} 响应。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_MODEL"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、model 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class ProviderError(BusinessError):
    """底层 LLM 客户端抛出的网络、鉴权或模型错误。"""

    def __init__(self, message: str, code: str = "PROVIDER_ERROR", http_status: int = 500, **extra):
        super().__init__(code=code, message=message, http_status=http_status, **extra)


class EmptyResponseError(BusinessError):
    """模型返回了空内容。"""

    def __init__(self, message: str = "Empty or invalid response from model", **extra):
        super().__init__(code="EMPTY_RESPONSE", message=message, http_status=500, **extra)


class InvalidResponseError(BusinessError):
    """模型输出经过解析后不是文本。"""

    def __init__(self, message: str = "Invalid response from LLM", **extra):
        super().__init__(code="INVALID_RESPONSE", message=message, http_status=500, **extra)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class NodeInputError(BusinessError):
    """工作流节点输入缺失，在发起任何网络请求之前抛出。"""

    def __init__(self, message: str, **extra):
        super().__init__(code="NODE_INPUT_ERROR", message=message, http_status=400, **extra)
