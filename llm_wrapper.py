"""
OpenRouter completion client for the Symptom Checker project.

Provides:
- build_prompt / build_headers / build_payload: the fixed request shape
- complete_symptoms: one POST to the completion endpoint, returned as a
  CompletionOutcome (success, HTTP error or transport error); never raises
  for network or JSON failures
- extract_content / extract_error_message: tolerant readers for the
  OpenAI-style response bodies
- append_raw_log: appends a diagnostic record to the raw log file
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import requests
from dotenv import load_dotenv

from pydantic_models import (
    ChatMessage,
    CompletionOutcome,
    CompletionRequest,
    CompletionSuccess,
    HttpError,
    TransportError,
)

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    value = _env_str(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, value)
        return default


OPENROUTER_API_URL = _env_str("OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions")
OPENROUTER_MODEL = _env_str("OPENROUTER_MODEL", "deepseek/deepseek-chat:free")
SITE_URL = _env_str("SYMPTOM_CHECKER_SITE_URL", "https://your-symptom-checker.com")
SITE_NAME = _env_str("SYMPTOM_CHECKER_SITE_NAME", "My Symptom Checker")
# None means requests waits as long as the transport allows
REQUEST_TIMEOUT = _env_float("SYMPTOM_CHECKER_TIMEOUT")
RAW_LOG = _env_str("SYMPTOM_CHECKER_RAW_LOG", str(BASE_DIR / "llm_raw_logs.txt"))

# PROMPT_TEMPLATE: {symptoms} is replaced verbatim (not .format, user text may contain braces)
PROMPT_TEMPLATE = (
    "I have the following symptoms: {symptoms}. "
    "Please tell me the possible diseases, recommended medicines, precautions, and advice."
)


def get_api_key() -> Optional[str]:
    return _env_str("OPENROUTER_API_KEY")


def build_prompt(symptoms: str) -> str:
    return PROMPT_TEMPLATE.replace("{symptoms}", symptoms)


def build_headers(api_key: Optional[str]) -> dict:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key or ''}",
        "HTTP-Referer": SITE_URL,
        "X-Title": SITE_NAME,
    }


def build_payload(symptoms: str, model: Optional[str] = None) -> dict:
    request = CompletionRequest(
        model=model or OPENROUTER_MODEL,
        messages=[ChatMessage(role="user", content=build_prompt(symptoms))],
    )
    return request.model_dump()


def append_raw_log(section: str, text: str) -> None:
    """Append one marked record to RAW_LOG. Failures are reported, not raised."""
    try:
        d = os.path.dirname(RAW_LOG)
        if d:
            os.makedirs(d, exist_ok=True)
        with open(RAW_LOG, "a", encoding="utf-8", errors="backslashreplace") as f:
            f.write(f"----{section}----\n")
            f.write(text + "\n")
    except (OSError, ValueError) as e:
        logger.warning("Could not write raw log %s: %s", RAW_LOG, e)


def extract_content(data: Any) -> str:
    """Return choices[0].message.content, or "" when the body has no usable text."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


def extract_error_message(data: Any) -> str:
    # top-level "message" wins over "error.message"
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
        error = data.get("error")
        if isinstance(error, dict):
            nested = error.get("message")
            if isinstance(nested, str) and nested:
                return nested
    return "Unknown error."


def complete_symptoms(
    symptoms: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
    post: Optional[Callable[..., requests.Response]] = None,
) -> CompletionOutcome:
    """
    Send the templated symptom prompt to the completion endpoint.

    The user's raw text is embedded in the prompt unchanged. Returns
    CompletionSuccess (text may be empty), HttpError for a non-ok status, or
    TransportError for network failures and undecodable bodies.
    """
    api_key = api_key or get_api_key()
    if not api_key:
        logger.warning("OPENROUTER_API_KEY is not set; the request will be rejected by the service")
    post = post or requests.post
    timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    try:
        response = post(
            OPENROUTER_API_URL,
            headers=build_headers(api_key),
            json=build_payload(symptoms, model),
            timeout=timeout,
        )
        if not response.ok:
            error_data = response.json()
            logger.warning("API error response (status %s): %s", response.status_code, error_data)
            append_raw_log("API_ERROR", f"{response.status_code} {json.dumps(error_data, ensure_ascii=False)}")
            return HttpError(status=response.status_code, message=extract_error_message(error_data))
        data = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("Error during API call: %s", e)
        append_raw_log("TRANSPORT_ERROR", f"{type(e).__name__}: {e}")
        return TransportError(message=str(e))

    text = extract_content(data)
    append_raw_log("CALL", text)
    return CompletionSuccess(text=text)
