"""Tests for prompt and payload construction."""

import pytest

from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.prompt import INPUT_END, INPUT_START, SYSTEM_PROMPT, build_payload, build_user_prompt
from arch_snapshot.core.schemas import AnalysisRequest


@pytest.fixture
def config():
    """Config with non-default sampling settings."""
    return SnapshotConfig(api_key="sk-test", model="test-model", max_output_tokens=300, temperature=0.1)


@pytest.fixture
def tree_request():
    return AnalysisRequest(kind="tree", content="src/\n  api/\n  lib/")


def test_system_prompt_constraints():
    """The system instruction forbids speculation and rewrite suggestions."""
    assert "Do NOT speculate beyond the provided input." in SYSTEM_PROMPT
    assert "Do NOT suggest rewrites or trendy tools." in SYSTEM_PROMPT
    assert "Exactly ONE primary architectural risk" in SYSTEM_PROMPT


def test_user_prompt_wraps_content(tree_request):
    """Content sits between the start and end delimiters."""
    prompt = build_user_prompt(tree_request)
    lines = prompt.split("\n")

    assert lines[0] == "Input type: tree"
    start = lines.index(INPUT_START)
    end = lines.index(INPUT_END)
    assert "\n".join(lines[start + 1:end]) == tree_request.content
    assert end == len(lines) - 1


def test_payload_messages(tree_request, config):
    """System and user messages are sent in order."""
    payload = build_payload(tree_request, config)

    assert payload["model"] == "test-model"
    assert payload["input"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert payload["input"][1]["role"] == "user"
    assert INPUT_START in payload["input"][1]["content"]


def test_payload_sampling_and_storage(tree_request, config):
    """Token ceiling, temperature and the no-persistence flag come from config."""
    payload = build_payload(tree_request, config)

    assert payload["max_output_tokens"] == 300
    assert payload["temperature"] == 0.1
    assert payload["store"] is False


def test_payload_strict_schema(tree_request, config):
    """The output schema requires all five fields and forbids extras."""
    fmt = build_payload(tree_request, config)["text"]["format"]

    assert fmt["type"] == "json_schema"
    assert fmt["name"] == "architecture_snapshot"
    assert fmt["strict"] is True

    schema = fmt["schema"]
    assert schema["additionalProperties"] is False
    assert set(schema["required"]) == {"summary", "patterns", "strengths", "risk", "improvement"}
    assert schema["properties"]["summary"]["maxLength"] == 700
    assert schema["properties"]["patterns"]["maxItems"] == 10
    assert schema["properties"]["patterns"]["items"]["maxLength"] == 80
    assert schema["properties"]["strengths"]["minItems"] == 1
    assert schema["properties"]["strengths"]["maxItems"] == 3
    assert schema["properties"]["strengths"]["items"]["maxLength"] == 140
    assert schema["properties"]["risk"]["maxLength"] == 220
    assert schema["properties"]["improvement"]["maxLength"] == 220
