"""
Plain-text filters for commands and for content read aloud.

Both the read handler and the content delivery facade push text through
clean_for_speech, so the two outputs stay identical for the same source.
"""

import html
import re

_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

FILLER_WORDS = ("um", "uh", "like", "you know")

# A filler plus the comma/semicolon that sets it off ("um, ..." / "..., you know")
_FILLER_RE = re.compile(
    r"(?:[,;]\s*)?\b(?:" + "|".join(r"\s+".join(map(re.escape, w.split())) for w in FILLER_WORDS) + r")\b(?:\s*[,;])?",
    re.IGNORECASE,
)


def strip_tags(text: str) -> str:
    """Remove all markup, including script/style bodies."""
    text = _SCRIPT_STYLE_RE.sub("", text)
    return _TAG_RE.sub("", text)


def sanitize_text(text: str) -> str:
    """Reduce untrusted input to a single line of plain text."""
    if not text:
        return ""
    text = strip_tags(text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_fillers(text: str) -> str:
    return _FILLER_RE.sub(" ", text)


def clean_for_speech(content: str) -> str:
    """
    Prepare content for speech synthesis.

    Strips markup, drops filler words (matched as whole words,
    case-insensitive) and normalizes whitespace:

        >>> clean_for_speech("um, this is <b>great</b>, you know")
        'this is great'
    """
    if not content:
        return ""
    text = html.unescape(strip_tags(content))
    text = remove_fillers(text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip().strip(",;").strip()
