"""LangChain ChatAnthropic wrapper for canvas localisation."""

from __future__ import annotations

import logging

from annotator.config import settings
from annotator.engine.errors import OracleUnavailable
from annotator.llm.prompts import build_localization_prompts
from annotator.utils.images import snapshot_to_data_url

logger = logging.getLogger(__name__)


def _text_of(content) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def request_localization(
    snapshot: str,
    phrase: str,
    canvas_width: float,
    canvas_height: float,
) -> str:
    """Ask the vision model where ``phrase`` is drawn; returns its raw answer."""
    if not settings.anthropic_api_key:
        raise OracleUnavailable("LLM not configured: set ANTHROPIC_API_KEY in .env")

    try:
        image_url = snapshot_to_data_url(snapshot)
    except ValueError as e:
        raise OracleUnavailable(str(e)) from e

    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage, SystemMessage

    llm = ChatAnthropic(
        model=settings.model_vision,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.oracle_max_tokens,
        temperature=0,
        timeout=settings.oracle_timeout_s,
    )

    system_msg, user_msg = build_localization_prompts(phrase, canvas_width, canvas_height)
    messages = [
        SystemMessage(content=system_msg),
        HumanMessage(
            content=[
                {"type": "text", "text": user_msg},
                {"type": "image_url", "image_url": {"url": image_url}},
            ]
        ),
    ]

    logger.debug("Requesting localisation of %r from %s", phrase, settings.model_vision)
    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        raise OracleUnavailable(f"Vision request failed: {e}") from e
    return _text_of(response.content)
