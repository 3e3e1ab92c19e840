"""Thin passthrough to the Gemini generative-AI endpoint.

One request per message: no history, no streaming, no retries.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from dotenv import load_dotenv
from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"

SYSTEM_INSTRUCTION = (
    "You are the FocusDesk productivity assistant. You help a student "
    "manage their tasks, lectures, projects and focus sessions. Provide "
    "concise, professional, and actionable advice."
)


class AssistantError(RuntimeError):
    """The assistant could not produce a reply."""


class Assistant:
    """Sends a single user message (plus optional context) to Gemini."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        *,
        client: Any = None,
    ) -> None:
        self._api_key = api_key or ""
        self._model = model
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> "Assistant":
        load_dotenv()
        return cls(os.environ.get(API_KEY_ENV), settings.ai_model)

    @property
    def model(self) -> str:
        return self._model

    @property
    def configured(self) -> bool:
        return bool(self._api_key) or self._client is not None

    def _get_client(self):
        if self._client is None:
            if not self._api_key:
                raise AssistantError(f"{API_KEY_ENV} is not set")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def reply(self, message: str, context: Any = None) -> str:
        """Return the model's text answer to *message*."""
        client = self._get_client()
        contents = (
            f"User Message: {message}\n"
            f"Context: {json.dumps(context if context is not None else {}, default=str)}"
        )
        try:
            response = client.models.generate_content(
                model=self._model,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                ),
            )
        except Exception as exc:
            logger.error("AI request to %s failed: %s", self._model, exc)
            raise AssistantError("Failed to generate AI response") from exc

        text = getattr(response, "text", None)
        if not text:
            raise AssistantError("Empty response from model")
        return text.strip()
