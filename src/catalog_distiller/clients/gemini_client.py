"""Gemini client translating free-text searches into query filters."""

import json
import logging
from textwrap import dedent
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from schemas.query import QueryDescriptor

from .exceptions import (
    APIError,
    BridgeResponseError,
    BridgeUnavailableError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

PROMPT_TEMPLATE = dedent(
    """
    Convert the catalog search query "{query}" to a JSON filter.
    Fields: year (number), month (string, full English month name), text (string).
    Only include the fields the query asks for.
    Example: "1995 issues" -> {{"year": 1995}}
    Example: "March 1992" -> {{"year": 1992, "month": "March"}}
    Example: "Fall of X" -> {{"text": "fall of x"}}
    Example: "Uncollected" -> {{"text": "uncollected"}}
    """
).strip()


class GeminiClient:
    """Client for the Gemini generateContent REST API.

    Implements the QueryTranslator interface. The service is called once
    per query with no retries, and every failure is raised as a
    ClientError so the caller can fall back to a local match.

    Config keys:
        api_key: Gemini API key; translation is unavailable without one
        model: Model name (default: gemini-2.5-flash)
        base_url: API root (default: the public Gemini endpoint)
        timeout: Request timeout in seconds (default: 30)

    Example:
        config = {"api_key": os.environ["GEMINI_API_KEY"]}
        with GeminiClient(config) as client:
            descriptor = client.translate("omnibus issues from 1995")
    """

    def __init__(self, config: dict | None = None):
        self._config = {"base_url": DEFAULT_GEMINI_BASE_URL, **(config or {})}
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def api_key(self) -> str | None:
        return self._config.get("api_key") or None

    @property
    def model(self) -> str:
        return str(self._config.get("model", DEFAULT_GEMINI_MODEL))

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout)
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def fetch(self, prompt: str) -> str:
        """Send a prompt and return the first candidate's text.

        Args:
            prompt: Prompt text

        Returns:
            Text of the first candidate part

        Raises:
            BridgeUnavailableError: If no API key is configured
            BridgeResponseError: If the response carries no candidate text
            APIError: If the API returns a non-2xx response
            ConnectionError: If the request fails or times out
        """
        if not self.is_configured:
            raise BridgeUnavailableError()

        response = self._post(
            f"/v1beta/models/{self.model}:generateContent",
            params={"key": self.api_key},
            json=self._build_body(prompt),
        )

        try:
            data = response.json()
        except ValueError as e:
            raise BridgeResponseError("Response body is not JSON") from e

        return self._candidate_text(data)

    def translate(self, text: str) -> QueryDescriptor:
        """Translate free text into a QueryDescriptor.

        Args:
            text: Raw search query

        Returns:
            The structured filter suggested by the model

        Raises:
            ClientError: On any transport, configuration or response failure
        """
        raw = self.fetch(PROMPT_TEMPLATE.format(query=text))
        descriptor = self._parse_descriptor(raw)
        logger.debug(f"Gemini translated {text!r} to {raw}")
        return descriptor

    def _build_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }

    def _candidate_text(self, data: Any) -> str:
        """Dig the first text part out of a generateContent response."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise BridgeResponseError("Response has no candidate text") from e

        if not isinstance(text, str):
            raise BridgeResponseError("Candidate text is not a string")
        return text

    def _parse_descriptor(self, raw: str) -> QueryDescriptor:
        """Validate the model's JSON output as a QueryDescriptor.

        Raises:
            BridgeResponseError: If the output is not a JSON object with
                only year, month and text keys of the right types
        """
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BridgeResponseError(f"Model output is not JSON: {raw[:80]!r}") from e

        if not isinstance(payload, dict):
            raise BridgeResponseError(
                f"Model output is a {type(payload).__name__}, expected an object"
            )

        try:
            return QueryDescriptor.model_validate(payload)
        except PydanticValidationError as e:
            raise BridgeResponseError(
                "Model output failed filter validation",
                errors=[str(err) for err in e.errors()],
            ) from e

    def _post(self, path: str, **kwargs) -> httpx.Response:
        """Make a single POST request, mapping transport failures.

        Raises:
            ConnectionError: If the request times out or cannot connect
            APIError: If the API returns a non-2xx response
        """
        try:
            response = self.client.request("POST", path, **kwargs)
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Gemini request timed out: {e}") from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Gemini request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Map HTTP errors to exceptions.

        Raises:
            NotFoundError: For 404 responses (usually an unknown model)
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 404:
            raise NotFoundError(f"Model not found: {self.model}")
        elif status_code == 429:
            raise RateLimitError(f"Gemini rate limit exceeded for {self.model}")
        else:
            raise APIError(f"Gemini API error {status_code}", status_code=status_code)
