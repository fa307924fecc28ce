"""Text-generation providers selected by LLMConfig.provider."""

from __future__ import annotations

from seaquote.core.config import AppSettings
from seaquote.core.protocols import IModelProvider
from seaquote.model_providers.bedrock_provider import BedrockModelProvider
from seaquote.model_providers.mock_provider import MockModelProvider


def create_model_provider(settings: AppSettings | None = None) -> IModelProvider:
    """Build the configured model provider."""
    if settings is None:
        settings = AppSettings()
    llm = settings.llm
    if llm.provider == "bedrock":
        return BedrockModelProvider(
            model_id=llm.bedrock_model,
            region=llm.region,
            endpoint_url=llm.endpoint_url,
            temperature=llm.temperature,
            max_tokens=llm.max_tokens,
        )
    return MockModelProvider()
