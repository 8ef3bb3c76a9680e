"""HTTP 接口。

- POST /llm-endpoint: 完整对话调用。
- POST /test-endpoint: 模型连通性测试。

所有异常都在这里转换为 {success: false, error} 包装，不会以原始异常穿过 HTTP 边界。

状态码规则：
- 缺少必填字段或请求体不是 JSON 对象：400。
- 必填字段检查之后抛出的 BusinessError 按自身 http_status 返回。规范化或 ChatExchange
  抛出的 ValidationError（例如 modelName 为空、llmType 不支持）因此返回 400，而不是 500。
- ProviderError、EmptyResponseError、InvalidResponseError 及其他异常：500。
"""

import asyncio
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from llm_gateway.api.service import check_model, invoke_llm
from llm_gateway.domain.exceptions import BusinessError
from llm_gateway.domain.models import ChatExchange, ResponseEnvelope
from llm_gateway.infrastructure.logging.logger import logger
from llm_gateway.providers.normalizer import normalize_check_config, normalize_config

router = APIRouter(tags=["LLM"])

MISSING_PARAMETERS = "Missing required parameters"
LLM_FALLBACK_ERROR = "Failed to process LLM request"
CHECK_FALLBACK_ERROR = "Failed to test model"
CHECK_SUCCESS_MESSAGE = "Model test successful"


async def _read_body(request: Request) -> Optional[Dict[str, Any]]:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _envelope(envelope: ResponseEnvelope, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=envelope.to_dict(), status_code=status_code)


def _error_response(exc: Exception, fallback: str) -> JSONResponse:
    if isinstance(exc, BusinessError):
        return _envelope(ResponseEnvelope.fail(exc.message or fallback), exc.http_status)
    return _envelope(ResponseEnvelope.fail(str(exc) or fallback), 500)


@router.post("/llm-endpoint")
async def llm_endpoint(request: Request) -> JSONResponse:
    """Normalize config, invoke the model, and wrap the result."""
    body = await _read_body(request)
    if not body or not body.get("systemMessage") or not body.get("userMessage") or not body.get("config"):
        return _envelope(ResponseEnvelope.fail(MISSING_PARAMETERS), 400)

    try:
        config = normalize_config(body["config"])
        exchange = ChatExchange(system_message=body["systemMessage"], user_message=body["userMessage"])
        result = await asyncio.to_thread(invoke_llm, exchange, config)
    except Exception as e:
        logger.error("llm_endpoint.error", extra={"extra": {"error": str(e)}})
        return _error_response(e, LLM_FALLBACK_ERROR)

    return _envelope(ResponseEnvelope.ok(result))


@router.post("/test-endpoint")
async def check_endpoint(request: Request) -> JSONResponse:
    """Send a trivial message to check the endpoint and credentials."""
    body = await _read_body(request)
    if not body or not body.get("llmType") or not body.get("baseUrl") or not body.get("model"):
        return _envelope(ResponseEnvelope.fail(MISSING_PARAMETERS), 400)

    try:
        config = normalize_check_config(body)
        content = await asyncio.to_thread(check_model, config)
    except Exception as e:
        logger.error("check_endpoint.error", extra={"extra": {"error": str(e)}})
        return _error_response(e, CHECK_FALLBACK_ERROR)

    return _envelope(ResponseEnvelope(success=True, message=CHECK_SUCCESS_MESSAGE, response=content))
