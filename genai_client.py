"""
genai_client.py
===============
Lightweight wrapper around the Google Generative Language REST API
(``generateContent``) used by the NEPHRA AI flows.

Authentication
--------------
Requests carry an API key in the ``x-goog-api-key`` header.  Create one at
https://aistudio.google.com/app/apikey and put it in ``config.json``
(``gemini_api_key``) or the ``GEMINI_API_KEY`` environment variable.

Usage
-----
::

    from genai_client import GeminiClient

    client = GeminiClient(api_key="abc")
    data = client.generate_json(
        "Suggest a daily water goal for a 30 year old.",
        response_schema={"type": "OBJECT",
                         "properties": {"goal_ml": {"type": "NUMBER"}},
                         "required": ["goal_ml"]},
    )
    # {"goal_ml": 2600}
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger('nephra.genai')

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
_DEFAULT_MODEL = "gemini-2.0-flash"
_DEFAULT_TIMEOUT = 30  # seconds

# Safety thresholds applied to every NEPHRA prompt
DEFAULT_SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": "HARM_CATEGORY_HATE_SPEECH",       "threshold": "BLOCK_ONLY_HIGH"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"},
    {"category": "HARM_CATEGORY_HARASSMENT",        "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_LOW_AND_ABOVE"},
]


class GenAIError(Exception):
    """Base class for generative-AI client failures."""


class GenAIAuthError(GenAIError):
    """Raised when the API rejects the configured key."""


class GenAIAPIError(GenAIError):
    """Raised when the API returns an unexpected error or cannot be reached."""


class GenAIResponseError(GenAIError):
    """Raised when the API answers but the answer holds no usable JSON."""


class GeminiClient:
    """Minimal Gemini ``generateContent`` client returning structured JSON."""

    def __init__(
        self,
        api_key: str,
        model: str = _DEFAULT_MODEL,
        timeout: int = _DEFAULT_TIMEOUT,
    ) -> None:
        """
        Args:
            api_key: Google AI Studio API key.
            model:   Model name, with or without the ``models/`` prefix.
            timeout: HTTP request timeout in seconds.
        """
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key
        self._model = model.split("/", 1)[1] if model.startswith("models/") else model
        self._timeout = timeout

    @property
    def model(self) -> str:
        return self._model

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def generate_json(
        self,
        prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
        safety_settings: Optional[List[Dict[str, str]]] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Run *prompt* and return the model's answer parsed as a JSON object.

        Args:
            prompt:          Full prompt text.
            response_schema: OpenAPI-style schema the answer must follow.
            safety_settings: Safety thresholds (defaults to
                             :data:`DEFAULT_SAFETY_SETTINGS`).
            temperature:     Optional sampling temperature.

        Returns:
            The decoded JSON object from the first candidate.

        Raises:
            GenAIAuthError:     The API key was rejected.
            GenAIAPIError:      HTTP or network failure.
            GenAIResponseError: Blocked prompt, empty or non-JSON answer.
        """
        generation_config: Dict[str, Any] = {"responseMimeType": "application/json"}
        if response_schema:
            generation_config["responseSchema"] = response_schema
        if temperature is not None:
            generation_config["temperature"] = temperature

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
            "safetySettings": safety_settings if safety_settings is not None
            else DEFAULT_SAFETY_SETTINGS,
        }
        data = self._post(f"/models/{self._model}:generateContent", body)
        text = self._extract_text(data)
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise GenAIResponseError(f"Model returned non-JSON text: {text[:200]!r}") from exc
        if not isinstance(parsed, dict):
            raise GenAIResponseError(f"Expected a JSON object, got {type(parsed).__name__}")
        return parsed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Perform a POST request against the API and return parsed JSON."""
        url = _API_BASE + path
        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type":   "application/json",
        }
        try:
            resp = requests.post(url, headers=headers, json=body, timeout=self._timeout)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            if resp.status_code in (401, 403):
                raise GenAIAuthError(
                    f"Gemini API rejected the API key ({resp.status_code})"
                ) from exc
            raise GenAIAPIError(
                f"Gemini API error {resp.status_code} for {path}: {resp.text}"
            ) from exc
        except requests.RequestException as exc:
            raise GenAIAPIError(f"Network error calling Gemini API: {exc}") from exc

        logger.debug("generateContent %s -> HTTP %s", self._model, resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise GenAIAPIError(f"Gemini API returned invalid JSON for {path}") from exc

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """Return the text of the first candidate in a generateContent reply."""
        feedback = data.get("promptFeedback") or {}
        if feedback.get("blockReason"):
            raise GenAIResponseError(f"Prompt blocked: {feedback['blockReason']}")

        candidates = data.get("candidates") or []
        if not candidates:
            raise GenAIResponseError("Gemini returned no candidates")

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts)
        if not text:
            reason = candidate.get("finishReason", "UNKNOWN")
            raise GenAIResponseError(f"Gemini returned an empty answer (finishReason={reason})")
        return text
