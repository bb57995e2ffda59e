"""Tests for response envelope unwrapping."""

from arch_snapshot.core.envelope import extract_output_text, upstream_error_message


def test_extract_output_text_first_block():
    """The first output_text block across output items wins."""
    envelope = {
        "output": [
            {"type": "reasoning", "summary": []},
            {
                "type": "message",
                "content": [
                    {"type": "refusal", "refusal": "no"},
                    {"type": "output_text", "text": '{"summary": "first"}'},
                    {"type": "output_text", "text": '{"summary": "second"}'},
                ],
            },
        ]
    }
    assert extract_output_text(envelope) == '{"summary": "first"}'


def test_extract_output_text_skips_non_string_text():
    """Blocks whose text is not a string are skipped."""
    envelope = {
        "output": [
            {"content": [{"type": "output_text", "text": None}]},
            {"content": [{"type": "output_text", "text": "ok"}]},
        ]
    }
    assert extract_output_text(envelope) == "ok"


def test_extract_output_text_tolerates_malformed_items():
    """Non-dict items and non-list content do not break the scan."""
    envelope = {
        "output": [
            "junk",
            {"content": "not a list"},
            {"content": [None, 3, {"type": "output_text", "text": "found"}]},
        ]
    }
    assert extract_output_text(envelope) == "found"


def test_extract_output_text_top_level_fallback():
    """A top-level output_text is used when no block matches."""
    envelope = {"output": [], "output_text": '{"summary": "x"}'}
    assert extract_output_text(envelope) == '{"summary": "x"}'


def test_extract_output_text_missing():
    """No payload anywhere yields None."""
    assert extract_output_text({"output": [{"content": [{"type": "refusal"}]}]}) is None
    assert extract_output_text({}) is None
    assert extract_output_text(None) is None
    assert extract_output_text(["output_text"]) is None


def test_upstream_error_message_nested():
    """Provider error.message is forwarded verbatim."""
    body = {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}
    assert upstream_error_message(body, 401) == "Incorrect API key provided"


def test_upstream_error_message_top_level():
    """A top-level message is used when there is no error object."""
    assert upstream_error_message({"message": "Rate limited"}, 429) == "Rate limited"


def test_upstream_error_message_generic():
    """Without a diagnostic the status is reported."""
    assert upstream_error_message(None, 503) == "OpenAI request failed (503)"
    assert upstream_error_message({"error": "plain"}, 500) == "OpenAI request failed (500)"
