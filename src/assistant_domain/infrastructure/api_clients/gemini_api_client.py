"""Client for the Gemini generateContent API."""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import APIError, APITimeoutError

logger = logging.getLogger(__name__)


class GeminiApiClient:
    def __init__(self) -> None:
        self.base_url = settings.GEMINI_API_BASE_URL
        self.api_key = settings.GEMINI_API_KEY
        self.model = settings.GEMINI_MODEL
        self.timeout = settings.LLM_TIMEOUT_SECONDS
        self.max_retries = settings.LLM_MAX_RETRIES

        # Status-code retries are handled by urllib3; timeouts are retried in _post()
        self.session = requests.Session()
        retry_strategy = Retry(
            total=self.max_retries,
            connect=0,
            read=False,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            backoff_factor=1,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate_text(self, prompt: str) -> str:
        """Sends a single-turn prompt and returns the concatenated text of the first candidate."""
        if not self.api_key:
            raise APIError("GEMINI_API_KEY is not set in environment variables.")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        response = self._post(url, payload)
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Failed to decode Gemini JSON response: {e}", original_exception=e)

        return self._extract_text(data)

    def _post(self, url: str, payload: dict) -> requests.Response:
        """POST with an explicit timeout; a timed-out call is retried at most max_retries times."""
        attempts = self.max_retries + 1
        last_timeout: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                response = self.session.post(url, params={"key": self.api_key}, json=payload, timeout=self.timeout)
                response.raise_for_status()
                return response
            except requests.exceptions.Timeout as e:
                last_timeout = e
                logger.warning(f"Gemini request timed out (attempt {attempt}/{attempts})")
            except requests.exceptions.RequestException as e:
                status_code = e.response.status_code if e.response is not None else None
                raise APIError(f"Gemini request failed: {e}", original_exception=e, status_code=status_code)

        raise APITimeoutError(
            f"Gemini request timed out after {attempts} attempts",
            original_exception=last_timeout,
            timeout_seconds=self.timeout,
        )

    @staticmethod
    def _extract_text(data: dict) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            raise APIError(f"Gemini response contained no candidates: {data.get('promptFeedback', data)}")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        if not text:
            raise APIError("Gemini response contained no text")
        return text

    def __del__(self) -> None:
        """Clean up the session when the object is destroyed."""
        if hasattr(self, "session"):
            self.session.close()
