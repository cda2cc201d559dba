"""Career advisor chat proxy."""

import structlog
from fastapi import APIRouter, Depends

from newgen.config.app_config import AppConfig
from newgen.core.advisor import ask_career_advisor
from newgen.llm.client import LLMClient, LLMError, LLMResponseError
from newgen.web.dependencies import get_app_config, get_llm_client
from newgen.web.errors import InvalidInputError, UpstreamError
from newgen.web.schemas import ChatRequest, ChatResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
def chat(
    request: ChatRequest,
    client: LLMClient = Depends(get_llm_client),
    config: AppConfig = Depends(get_app_config),
) -> ChatResponse:
    """Forward a message to the AI provider and return its reply."""
    if not request.message:
        raise InvalidInputError("Missing message")

    try:
        reply = ask_career_advisor(client, config.llm.system_prompt, request.message)
    except LLMResponseError as e:
        logger.warning("chat.upstream_error", error=str(e))
        raise UpstreamError("No response from AI provider") from e
    except LLMError as e:
        logger.warning("chat.upstream_error", error=str(e))
        raise UpstreamError("AI request failed") from e

    return ChatResponse(reply=reply)
