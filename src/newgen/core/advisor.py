"""Career advisor conversation built on the LLM client."""

from __future__ import annotations

import structlog

from newgen.llm.client import LLMClient

logger = structlog.get_logger(__name__)


def ask_career_advisor(client: LLMClient, system_prompt: str, message: str) -> str:
    """Forward one user message framed by the career-advisor system prompt.

    Raises:
        LLMError: Propagated from the client on any provider failure
    """
    logger.debug("advisor.ask", message_chars=len(message))
    return client.simple_chat(system_prompt=system_prompt, user_message=message)
