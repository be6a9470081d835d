"""Minimal entity codec for feed text and rendered markup.

Feeds frequently ship text that is already escaped once; encoding always
decodes first so a value is never double-escaped.
"""

from __future__ import annotations

# Order matters: "&amp;" goes first, matching how feeds double-escape.
_DECODE_TABLE = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
)


def decode(text: str) -> str:
    for entity, char in _DECODE_TABLE:
        text = text.replace(entity, char)
    return text


def encode_for_text(text: str) -> str:
    return decode(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def encode_for_attribute(text: str) -> str:
    return (
        decode(text)
        .replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )
