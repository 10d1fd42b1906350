"""
OpenAI Service - LLM implementation using OpenAI API.

Provides structured data extraction for resumes and candidate ranking.
"""
from typing import Dict, Any, Optional, Tuple
import json
import logging
import copy
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import (
    RESUME_EXTRACTION_SYSTEM_PROMPT,
    RANKING_SYSTEM_PROMPT,
)
from core.llm.schema_models import RANKING_SCHEMA, RESUME_EXTRACTION_SCHEMA

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse a reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Longest wait declared by retry-after / x-ratelimit-reset-* headers, else 0.0."""
    try:
        headers = exc.response.headers
    except AttributeError:
        return 0.0

    candidates = []
    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            pass

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Server-declared wait for rate limits, capped exponential backoff otherwise."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, 120)

    exp = wait_exponential(multiplier=1, min=2, max=60)
    return exp(retry_state)


def _llm_retry(**kwargs):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception_type((
            openai.RateLimitError,
            openai.APITimeoutError,
            openai.APIConnectionError,
            openai.InternalServerError,
        )),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(5),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


def _unwrap_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Split a schema spec into (name, strict, raw JSON schema).

    Accepts either a wrapped spec {'name': str, 'strict': bool, 'schema': {...}}
    or a raw JSON schema dict.
    """
    if isinstance(spec, dict) and "schema" in spec and "name" in spec:
        return spec.get("name", "extraction_response"), bool(spec.get("strict", False)), spec["schema"]
    return "extraction_response", False, spec


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Uses JSON Schema mode for every call so responses can be validated
    before they reach the database.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.1,
        client: Optional[OpenAI] = None
    ):
        if client is None:
            client_kwargs = {}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            client = OpenAI(**client_kwargs)

        self.client = client
        self.model = model
        self.temperature = temperature

    @_llm_retry()
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """Extract structured data using JSON Schema mode.

        Args:
            text: Text to extract from
            schema_spec: Either a wrapped spec {'name', 'strict', 'schema'} or raw JSON schema
            system_prompt: Optional custom system prompt
            user_message: Optional custom user message. If None, text is sent as-is.
        """
        name, strict, raw_schema = _unwrap_schema_spec(schema_spec)
        runtime_schema = copy.deepcopy(raw_schema)

        if runtime_schema.get("type") != "object" or "properties" not in runtime_schema:
            raise ValueError(f"Not a valid JSON Schema object. Top-level keys: {list(runtime_schema.keys())}")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_message if user_message is not None else text})

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": runtime_schema,
                    "strict": strict,
                },
            },
        )

        try:
            content = response.choices[0].message.content
            data = json.loads(content or "{}")
        except (json.JSONDecodeError, IndexError, AttributeError) as e:
            logger.error(f"Failed to parse structured data response: {e}")
            raise

        return data

    def rank_candidates(self, prompt: str) -> Dict[str, Any]:
        """Rank candidates described in the prompt.

        Returns:
            Raw {"rankings": [...]} object; validated by the caller
        """
        data = self.extract_structured_data(
            prompt,
            RANKING_SCHEMA,
            system_prompt=RANKING_SYSTEM_PROMPT,
        )
        logger.info(f"AI ranking ({self.model}) returned {len(data.get('rankings') or [])} entries")
        return data

    def extract_resume_data(self, text: str) -> Dict[str, Any]:
        """Extract skills, years, latest title and highlights from resume text."""
        data = self.extract_structured_data(
            text,
            RESUME_EXTRACTION_SCHEMA,
            system_prompt=RESUME_EXTRACTION_SYSTEM_PROMPT,
            user_message=f"Extract the structured resume data following the schema.\n\nResume:\n{text}"
        )
        logger.debug(f"Extracted {len(data.get('skills') or [])} skills via {self.model}")
        return data
