"""OpenAI chat-completions client used by the scoring pass."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    NotFoundError,
    OpenAI,
    OpenAIError,
    PermissionDeniedError,
    RateLimitError,
)

from .config import ScoringConfig
from .errors import ScoringError

logger = logging.getLogger(__name__)

_REASONING_MODEL_PREFIXES = ("gpt-5", "o1", "o3", "o4")


class CompletionClient:
    """Request JSON-mode chat completions from an OpenAI-compatible endpoint."""

    def __init__(self, config: ScoringConfig) -> None:
        """Initialize client configuration.

        Args:
            config: Validated scoring configuration (API key, model, base URL).
        """
        self._config = config
        self._client: Optional[OpenAI] = None

    @property
    def model(self) -> str:
        return self._config.model

    def complete_json(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion in JSON response mode.

        Returns:
            The text payload of the first choice.

        Raises:
            ScoringError: If the request fails or the response has no text.
        """
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                **_reasoning_options(self._config.model),
            )
        except (
            APIConnectionError,
            APIError,
            APITimeoutError,
            AuthenticationError,
            BadRequestError,
            InternalServerError,
            NotFoundError,
            PermissionDeniedError,
            RateLimitError,
            OSError,
            ValueError,
        ) as exc:
            logger.warning(
                "OpenAI request failed",
                extra={"model": self._config.model, "error": str(exc)},
            )
            raise ScoringError(f"OpenAI request failed: {exc}") from exc

        content = extract_message_text(response)
        if not content:
            logger.warning(
                "OpenAI response did not contain text content",
                extra={"model": self._config.model},
            )
            raise ScoringError("OpenAI response does not contain text content.")
        return content

    def _get_client(self) -> OpenAI:
        """Get or initialize the OpenAI SDK client.

        Raises:
            ScoringError: If client initialization fails.
        """
        if self._client is not None:
            return self._client
        try:
            self._client = OpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                max_retries=0,
            )
        except (OpenAIError, OSError, ValueError) as exc:
            logger.warning(
                "OpenAI client initialization failed",
                extra={"model": self._config.model, "error": str(exc)},
            )
            raise ScoringError(str(exc)) from exc
        return self._client


def _reasoning_options(model: str) -> Dict[str, Any]:
    """Low reasoning effort for reasoning-capable models; nothing for others."""
    if model.startswith(_REASONING_MODEL_PREFIXES):
        return {"reasoning_effort": "low"}
    return {}


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_message_text(response: Any) -> str:
    """Extract the text payload of the first choice of a completion response.

    ``message.content`` may be a plain string or a list of content parts, in
    which case the ``text`` parts are concatenated in order.
    """
    choices = _get(response, "choices") or []
    if not choices:
        return ""

    message = _get(choices[0], "message")
    content = _get(message, "content") if message is not None else None

    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        fragments = []
        for part in content:
            text = _get(part, "text")
            if _get(part, "type") == "text" and isinstance(text, str):
                fragments.append(text)
        return "".join(fragments).strip()
    return ""
