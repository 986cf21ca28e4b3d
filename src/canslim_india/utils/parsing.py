import json
import re
from typing import Any, Dict, List

from canslim_india.analysts.models import Source
from canslim_india.utils.errors import MalformedResponseError
from canslim_india.utils.logging_config import logger

# Opening fence with an optional language tag (```json, ```JSON, ```)
_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*")
_CLOSING_FENCE = re.compile(r"```$")

PLACEHOLDER_URI = "#"


def clean_json_string(text: str) -> str:
    """
    Strip Markdown code-fence wrapping from a model reply.

    Either fence may be missing; anything between them is returned trimmed.
    """
    clean = text.strip()
    clean = _OPENING_FENCE.sub("", clean, count=1)
    clean = _CLOSING_FENCE.sub("", clean.rstrip(), count=1)
    return clean.strip()


def parse_json_object(text: str | None) -> Dict[str, Any]:
    """
    Parse a (possibly fenced) model reply into a dict.

    An empty body is read as ``{}``. Non-JSON text, or JSON whose top level is
    not an object, raises MalformedResponseError.
    """
    if not text or not text.strip():
        logger.warning("Model returned an empty body; treating it as {}")
        return {}

    clean = clean_json_string(text)
    try:
        data = json.loads(clean)
    except json.JSONDecodeError as e:
        logger.error(f"Could not parse model reply as JSON: {e}")
        logger.debug(f"Unparseable reply: {text[:500]}")
        raise MalformedResponseError(f"Model reply is not valid JSON: {e}", raw_text=text) from e

    if not isinstance(data, dict):
        logger.error(f"Model reply is JSON but not an object (got {type(data).__name__})")
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}", raw_text=text
        )
    return data


def extract_text(response: Any) -> str:
    """Pull the generated text out of a chat-model message."""
    content = getattr(response, "content", response)
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        # Multi-part content: plain strings and {"type": "text", "text": ...} blocks
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    return str(content)


def _get(mapping: Any, *keys: str) -> Any:
    """First present key, accepting both snake_case and camelCase spellings."""
    if not isinstance(mapping, dict):
        return None
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def extract_sources(response: Any) -> List[Source]:
    """
    Read web-grounding citations from a response's metadata.

    Entries without a usable URI are dropped; a missing title becomes "Source".
    """
    metadata = getattr(response, "response_metadata", None) or {}
    grounding = _get(metadata, "grounding_metadata", "groundingMetadata") or {}
    chunks = _get(grounding, "grounding_chunks", "groundingChunks") or []

    sources = []
    for chunk in chunks:
        web = _get(chunk, "web") or {}
        uri = _get(web, "uri")
        uri = uri.strip() if isinstance(uri, str) else ""
        if not uri or uri == PLACEHOLDER_URI:
            continue
        title = _get(web, "title")
        title = title.strip() if isinstance(title, str) and title.strip() else "Source"
        sources.append(Source(title=title, uri=uri))

    logger.debug(f"Extracted {len(sources)} grounding sources from {len(chunks)} chunks")
    return sources
