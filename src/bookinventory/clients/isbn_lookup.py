"""
Client for the optional ISBN autofill service.
Asks a text-generation API (Gemini `generateContent`) for the details of a book
and best-effort extracts a JSON object from its free-form reply. Nothing else
in the system depends on it; manual entry always works.
"""

import json
import re
import httpx
from bookinventory.core.config import settings
from bookinventory.core.errors import LookupServiceError
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """
I need detailed information about a book with ISBN: {isbn}.
Please provide the following details in JSON format:
{{
  "title": "Book title",
  "author": "Author name",
  "publicationDate": "YYYY-MM-DD",
  "publisher": "Publisher name",
  "category": "Book category (Fiction, Non-Fiction, Biography, Science, History, Programming, Self-Help, Business, Other)",
  "description": "Brief description of the book"
}}
Ensure the date is in YYYY-MM-DD format and the category matches one of the specified options exactly.
"""

_JSON_BLOCK = re.compile(r"```json\s*\n(.*?)\n\s*```|(\{.*\})", re.DOTALL)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Pulls a JSON object out of free-form text: a ```json fenced block if there
    is one, else the span from the first '{' to the last '}'.

    Returns:
        Dict[str, Any]: The parsed object, or {} when nothing parseable is found.
    """
    match = _JSON_BLOCK.search(text or "")
    if not match:
        return {}
    try:
        data = json.loads(match.group(1) or match.group(2))
    except json.JSONDecodeError as exc:
        logger.warning(f"Could not parse JSON from lookup response: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def fetch_book_details(isbn: str, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """
    Looks up book details for an ISBN.

    Args:
        isbn (str): ISBN to look up.
        client (Optional[httpx.Client]): HTTP client to use; a new one with
            LOOKUP_TIMEOUT_SECONDS is created if omitted.

    Returns:
        Dict[str, Any]: Whatever fields could be parsed from the reply, possibly empty.

    Raises:
        LookupServiceError: The service is not configured, unreachable or answered with an error.
    """
    if not settings.lookup_enabled:
        logger.error("Gemini API key is not configured.")
        raise LookupServiceError("ISBN lookup is not configured")

    body = {"contents": [{"parts": [{"text": PROMPT_TEMPLATE.format(isbn=isbn)}]}]}
    params = {"key": settings.GEMINI_API_KEY}
    owns_client = client is None
    client = client or httpx.Client(timeout=settings.LOOKUP_TIMEOUT_SECONDS)
    try:
        response = client.post(settings.GEMINI_API_URL, params=params, json=body)
        response.raise_for_status()
        data = response.json()
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except httpx.RequestError as exc:
        logger.error(f"Request to lookup service failed: {exc}")
        raise LookupServiceError() from exc
    except httpx.HTTPStatusError as exc:
        logger.error(f"Lookup service HTTP error: {exc.response.status_code} - {exc.response.text}")
        raise LookupServiceError() from exc
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        logger.error(f"Unexpected lookup service response shape: {exc}")
        raise LookupServiceError() from exc
    finally:
        if owns_client:
            client.close()

    details = extract_json_object(text)
    logger.info(f"ISBN lookup for '{isbn}' returned {len(details)} fields.")
    return details
