"""Lenient, per-field extraction helpers shared by the feed spiders.

These are regex based rather than a strict XML parse: upstream feeds drift,
and one broken block must not cost the rest of the feed.
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, Optional, Union

from ..entities import decode

_CDATA_RE = re.compile(r"^\s*<!\[CDATA\[(.*?)\]\]>\s*$", re.S)
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def as_text(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw or ""


def iter_blocks(text: str, tag: str) -> Iterator[str]:
    """Yield the bodies of ``<tag>...</tag>`` blocks.

    A block may not contain another opening ``<tag``, so an unterminated block
    is skipped instead of swallowing the next well-formed one.
    """
    pattern = re.compile(
        rf"<{tag}\b[^>]*>((?:(?!<{tag}\b).)*?)</{tag}\s*>",
        re.S | re.I,
    )
    for m in pattern.finditer(text):
        yield m.group(1)


def unwrap_cdata(value: str) -> str:
    m = _CDATA_RE.match(value)
    return m.group(1) if m else value


def field(block: str, tag: str) -> Optional[str]:
    """First ``<tag ...>value</tag>`` in ``block``, CDATA unwrapped and trimmed."""
    # CDATA form first: its payload may legally contain "</tag>"-like text
    m = re.search(rf"<{tag}(?:\s[^>]*?)?(?<!/)>\s*<!\[CDATA\[(.*?)\]\]>\s*</{tag}\s*>", block, re.S | re.I)
    if m is None:
        m = re.search(rf"<{tag}(?:\s[^>]*?)?(?<!/)>(.*?)</{tag}\s*>", block, re.S | re.I)
    if m is None:
        return None
    value = unwrap_cdata(m.group(1)).strip()
    return value or None


def text_field(block: str, tag: str) -> Optional[str]:
    value = field(block, tag)
    if value is None:
        return None
    return decode(value).strip() or None


def tag_attributes(block: str, tag: str) -> Iterator[Dict[str, str]]:
    """Attribute dicts of every ``<tag ...>`` opening (or self-closing) tag."""
    for m in re.finditer(rf"<{tag}\b([^>]*)>", block, re.I):
        attrs: Dict[str, str] = {}
        for name, dq, sq in _ATTR_RE.findall(m.group(1)):
            attrs[name.lower()] = decode(dq if dq else sq)
        yield attrs
