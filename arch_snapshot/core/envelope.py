"""Unwrapping of the provider's response envelope."""

from typing import Any

OUTPUT_TEXT = "output_text"


def extract_output_text(envelope: Any) -> str | None:
    """
    Locate the generated text payload in a Responses API envelope.

    Scans output items in order and returns the text of the first content
    block tagged "output_text". Falls back to a top-level "output_text"
    string when no block matches.

    Args:
        envelope: Decoded JSON body of the provider response (any shape)

    Returns:
        The generated text, or None if the envelope carries none
    """
    if not isinstance(envelope, dict):
        return None

    output = envelope.get("output")
    if isinstance(output, list):
        for item in output:
            if not isinstance(item, dict):
                continue
            content = item.get("content")
            if not isinstance(content, list):
                continue
            for block in content:
                if (
                    isinstance(block, dict)
                    and block.get("type") == OUTPUT_TEXT
                    and isinstance(block.get("text"), str)
                ):
                    return block["text"]

    fallback = envelope.get(OUTPUT_TEXT)
    if isinstance(fallback, str):
        return fallback
    return None


def upstream_error_message(body: Any, status_code: int) -> str:
    """Pick the provider's own diagnostic from an error body, else a generic message."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
        if isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
    return f"OpenAI request failed ({status_code})"
