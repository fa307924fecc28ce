"""Bedrock model provider via the bedrock-runtime Converse API.

Drafts RFQ emails with a hosted Claude model.
"""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from seaquote.core.exceptions import ModelResponseError
from seaquote.model_providers.structured import parse_structured_response

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BedrockModelProvider:
    """Production IModelProvider backed by Amazon Bedrock."""

    def __init__(self, model_id: str, region: str = "us-east-1", endpoint_url: str | None = None,
                 temperature: float = 0.7, max_tokens: int = 2000) -> None:
        self._model_id = model_id
        self._temperature = temperature
        self._max_tokens = max_tokens
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("bedrock-runtime", **kwargs)

    @property
    def model_name(self) -> str:
        return self._model_id

    def chat(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        system = [{"text": m["content"]} for m in messages if m.get("role") == "system"]
        conversation = [
            {"role": m["role"], "content": [{"text": m["content"]}]}
            for m in messages if m.get("role") != "system"
        ]
        request: dict[str, Any] = {
            "modelId": self._model_id,
            "messages": conversation,
            "inferenceConfig": {
                "temperature": kwargs.get("temperature", self._temperature),
                "maxTokens": kwargs.get("max_tokens", self._max_tokens),
            },
        }
        if system:
            request["system"] = system

        started = time.monotonic()
        try:
            resp = self._client.converse(**request)
        except (ClientError, BotoCoreError) as exc:
            raise ModelResponseError(f"Bedrock converse failed for {self._model_id}: {exc}") from exc

        content = resp.get("output", {}).get("message", {}).get("content", [])
        text = "".join(block.get("text", "") for block in content)
        usage = resp.get("usage", {})
        logger.info(
            "Bedrock %s returned %d chars (%s tokens)",
            self._model_id, len(text), usage.get("totalTokens", "?"),
            extra={"duration_ms": int((time.monotonic() - started) * 1000)},
        )
        if not text:
            raise ModelResponseError(f"No response content from {self._model_id}")
        return text

    def structured_output(
        self, messages: list[dict[str, str]], response_model: type[T], **kwargs: Any
    ) -> T:
        return parse_structured_response(self.chat(messages, **kwargs), response_model)  # type: ignore[type-var]
