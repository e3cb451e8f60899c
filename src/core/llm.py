"""LLM client using OpenRouter."""

from langchain_openai import ChatOpenAI
from src.config import settings
from src.core.logging import get_logger

logger = get_logger("llm")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

DEFAULT_MODEL = "claude-haiku-4.5"

SUPPORTED_MODELS = {
    "claude-haiku-4.5": {
        "provider": "openrouter",
        "model_id": "anthropic/claude-haiku-4.5",
    },
    "claude-sonnet-4": {
        "provider": "openrouter",
        "model_id": "anthropic/claude-sonnet-4",
    },
    "gpt-4o": {
        "provider": "openrouter",
        "model_id": "openai/gpt-4o",
    },
    "gpt-4o-mini": {
        "provider": "openrouter",
        "model_id": "openai/gpt-4o-mini",
    },
}


def get_chat_llm(
    model: str = DEFAULT_MODEL,
    temperature: float = 0.0,
    max_tokens: int | None = None,
) -> ChatOpenAI:
    """Get a chat LLM instance via OpenRouter."""
    api_key = settings.openrouter_api_key
    if not api_key:
        raise ValueError("OPENROUTER_API_KEY not configured")

    if model not in SUPPORTED_MODELS:
        logger.warning(f"[LLM] Unknown model {model}, falling back to {DEFAULT_MODEL}")
    config = SUPPORTED_MODELS.get(model, SUPPORTED_MODELS[DEFAULT_MODEL])
    model_id = config["model_id"]

    logger.debug(f"[LLM] Using OpenRouter: {model} -> {model_id}")

    return ChatOpenAI(
        model=model_id,
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
        temperature=temperature,
        max_tokens=max_tokens,
    )
