"""The managed HTML document.

The page is parsed once (BeautifulSoup, ``html.parser`` builder, which records
where each start tag sits in the source) and is only ever queried. Region
updates are recorded as replacements of character spans of the original text;
``serialize()`` applies them, so everything outside a replaced span is
returned byte for byte.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from pagefeeds.errors import RegionNotFound

VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input link meta param source track wbr".split()
)
RAW_TEXT_ELEMENTS = frozenset(("script", "style"))

_START_TAG_RE = re.compile(
    r"""<[a-zA-Z][^\s/>]*(?:\s+[^\s=/>]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+))?|\s*/(?!>))*\s*/?>"""
)


@dataclass(frozen=True)
class Region:
    selector: str
    tag: Tag
    outer_start: int
    inner_start: int
    inner_end: int
    outer_end: int


class Document:
    def __init__(self, text: str) -> None:
        self.text = text
        self.soup = BeautifulSoup(text, "html.parser")
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]
        self._ops: Dict[Tuple[int, int], str] = {}

    @classmethod
    def load(cls, path: str) -> "Document":
        # newline="" keeps CRLF pages intact on write-back
        with open(path, "r", encoding="utf-8", newline="") as f:
            return cls(f.read())

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.serialize())

    # --- Queries ---
    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def region(self, selector: str) -> Region:
        tag = self.select_one(selector)
        if tag is None:
            raise RegionNotFound(selector)
        span = self.span(tag)
        if span is None:
            raise RegionNotFound(f"{selector} (cannot locate source span)")
        return Region(selector, tag, *span)

    def items(self, region: Region, item_selector: str) -> List[Tag]:
        return region.tag.select(item_selector)

    def outer_html(self, tag: Tag) -> str:
        """Original source markup of ``tag`` (not a re-serialization)."""
        span = self.span(tag)
        if span is None:
            return str(tag)
        return self.text[span[0]:span[3]]

    def closing_indent(self, region: Region) -> str:
        """Whitespace preceding the region's closing tag on its own line, or ''."""
        line_start = self.text.rfind("\n", region.inner_start, region.inner_end) + 1
        if line_start == 0:
            return ""
        lead = self.text[line_start:region.inner_end]
        return lead if not lead.strip() else ""

    def span(self, tag: Tag) -> Optional[Tuple[int, int, int, int]]:
        """(outer_start, inner_start, inner_end, outer_end) offsets in ``text``."""
        if tag.sourceline is None or tag.sourcepos is None:
            return None
        if tag.sourceline - 1 >= len(self._line_starts):
            return None
        start = self._line_starts[tag.sourceline - 1] + tag.sourcepos
        m = _START_TAG_RE.match(self.text, start)
        if m is None:
            return None
        inner_start = m.end()
        if tag.name in VOID_ELEMENTS or m.group(0).endswith("/>"):
            return start, inner_start, inner_start, inner_start
        close = self._matching_close(tag.name, inner_start)
        if close is None:
            return None
        return start, inner_start, close[0], close[1]

    def _matching_close(self, name: str, pos: int) -> Optional[Tuple[int, int]]:
        if name.lower() in RAW_TEXT_ELEMENTS:
            m = re.compile(rf"</{re.escape(name)}\s*>", re.I).search(self.text, pos)
            return (m.start(), m.end()) if m else None
        pattern = re.compile(
            rf"<!--.*?-->|<(script|style)\b[^>]*>.*?</\1\s*>|<(/?){re.escape(name)}(?=[\s/>])[^>]*>",
            re.S | re.I,
        )
        depth = 1
        for m in pattern.finditer(self.text, pos):
            if m.group(2) is None:
                # comment or script/style raw text
                continue
            if m.group(2):
                depth -= 1
                if depth == 0:
                    return m.start(), m.end()
            elif not m.group(0).endswith("/>"):
                depth += 1
        return None

    # --- Mutation ---
    def replace_inner(self, region: Region, html: str) -> None:
        self._ops[(region.inner_start, region.inner_end)] = html

    @property
    def changed(self) -> bool:
        return bool(self._ops)

    def serialize(self) -> str:
        out: List[str] = []
        cursor = 0
        for (start, end), html in sorted(self._ops.items()):
            if start < cursor:
                raise ValueError(f"Overlapping region replacements at offset {start}")
            out.append(self.text[cursor:start])
            out.append(html)
            cursor = end
        out.append(self.text[cursor:])
        return "".join(out)
