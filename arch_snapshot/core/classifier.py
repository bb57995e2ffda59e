"""Input classification and client-side request validation."""

import re
from typing import Any

from arch_snapshot.core.config import MAX_CONTENT_CHARS
from arch_snapshot.core.exceptions import InputTooLargeError, InputTooVagueError
from arch_snapshot.core.schemas import AnalysisRequest, InputKind

TREE = "tree"
DESCRIPTION = "description"

_PATH_SEPARATOR = re.compile(r"[/\\]")
_TREE_GLYPH = re.compile(r"[├└│]")
_INDENTED_LINE = re.compile(r"\n[ \t]{2,}\S")

_KIND_ALIASES = {
    "tree": TREE,
    "description": DESCRIPTION,
    "desc": DESCRIPTION,
}


def detect_type(text: str) -> InputKind:
    """
    Classify free text as a directory tree or a prose description.

    Best-effort signal for the prompt: path separators, tree-drawing glyphs,
    indented continuation lines or any line break mark the input as a tree.

    Args:
        text: Raw user text

    Returns:
        "tree" or "description"
    """
    t = str(text or "")
    if _PATH_SEPARATOR.search(t) or _TREE_GLYPH.search(t):
        return TREE
    if _INDENTED_LINE.search(t) or "\n" in t:
        return TREE
    return DESCRIPTION


def build_request(raw_text: str, max_chars: int = MAX_CONTENT_CHARS) -> AnalysisRequest:
    """
    Validate raw user text and build a normalized AnalysisRequest.

    Args:
        raw_text: Text as typed by the user
        max_chars: Upper bound on the trimmed length

    Returns:
        AnalysisRequest with inferred kind and trimmed content

    Raises:
        InputTooVagueError: If the text is empty after trimming
        InputTooLargeError: If the trimmed text exceeds max_chars
    """
    content = (raw_text or "").strip()
    if not content:
        raise InputTooVagueError()
    if len(content) > max_chars:
        raise InputTooLargeError(len(content), max_chars)
    return AnalysisRequest(kind=detect_type(content), content=content)


def normalize_kind(declared: Any, content: str) -> InputKind:
    """Map a caller-declared type to a known kind, inferring it when unrecognized."""
    if isinstance(declared, str):
        kind = _KIND_ALIASES.get(declared.strip().lower())
        if kind is not None:
            return kind
    return detect_type(content)
