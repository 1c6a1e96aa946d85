"""
LLM Response Parsing

Models wrap their JSON in prose or markdown fences often enough that the
first-brace-to-last-brace span is taken as the payload.
"""

import json
import re

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

# Shown when the model leaves out social sentiment
NEUTRAL_SOCIAL_SENTIMENT = {
    "reddit": {"score": 45, "sentiment": "neutral"},
    "twitter": {"score": 50, "sentiment": "neutral"},
    "telegram": {"score": 40, "sentiment": "neutral"},
    "discord": {"score": 35, "sentiment": "neutral"},
    "youtube": {"score": 30, "sentiment": "neutral"},
}


def extract_json(content: str) -> dict:
    """
    Parse the JSON object embedded in an LLM response.

    Raises:
        ValueError: If no JSON object can be decoded
    """
    match = _JSON_OBJECT.search(content or "")
    payload = match.group(0) if match else (content or "")

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"LLM returned invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("LLM returned JSON that is not an object")
    return parsed


def default_social_sentiment() -> dict:
    """Fresh copy of the neutral social sentiment block."""
    return {platform: dict(values) for platform, values in NEUTRAL_SOCIAL_SENTIMENT.items()}
