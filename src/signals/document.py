"""Narrow query interface over one HTML page."""

import re
from functools import cached_property

from bs4 import BeautifulSoup, Tag


class PageDocument:
    """
    Read-only view of a page for the signal extractor.

    Raw-text pattern queries run against the HTML string. Element queries go
    through BeautifulSoup, parsed lazily on first use.
    """

    TEXT_INPUT_TYPES = frozenset({"text", "email", "tel", "password", "search", "number"})

    def __init__(self, html: str):
        self.html = html or ""

    @cached_property
    def lower(self) -> str:
        return self.html.lower()

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "lxml")

    # -------------------------------------------------------------------------
    # Raw text queries
    # -------------------------------------------------------------------------

    def contains(self, text: str) -> bool:
        """Case-insensitive substring test."""
        return text.lower() in self.lower

    def contains_any(self, texts) -> bool:
        return any(self.contains(t) for t in texts)

    def search(self, pattern: str | re.Pattern, flags: int = re.IGNORECASE) -> bool:
        if isinstance(pattern, re.Pattern):
            return pattern.search(self.html) is not None
        return re.search(pattern, self.html, flags) is not None

    def first_match(self, pattern: str, flags: int = 0) -> str | None:
        match = re.search(pattern, self.html, flags)
        return match.group(1) if match else None

    def count(self, pattern: str, flags: int = re.IGNORECASE) -> int:
        return len(re.findall(pattern, self.html, flags))

    # -------------------------------------------------------------------------
    # Element queries
    # -------------------------------------------------------------------------

    def title(self) -> str | None:
        tag = self.soup.find("title")
        return _clean(tag.get_text()) if tag else None

    def meta_content(self, name: str | None = None, prop: str | None = None) -> str | None:
        """Content of the first <meta> with the given name or property."""
        attr, value = ("name", name) if name else ("property", prop)
        tag = self.soup.find(
            "meta",
            attrs={attr: re.compile(rf"^\s*{re.escape(value)}\s*$", re.IGNORECASE)},
        )
        if tag is None:
            return None
        return _clean(tag.get("content", ""))

    def has_meta(self, name: str | None = None, prop: str | None = None) -> bool:
        attr, value = ("name", name) if name else ("property", prop)
        return self.soup.find(
            "meta",
            attrs={attr: re.compile(rf"^\s*{re.escape(value)}\s*$", re.IGNORECASE)},
        ) is not None

    def link_href(self, rel: str) -> str | None:
        """href of the first <link> whose rel includes `rel`."""
        for link in self.soup.find_all("link"):
            rels = link.get("rel") or []
            if isinstance(rels, str):
                rels = rels.split()
            if rel.lower() in (r.lower() for r in rels):
                return _clean(link.get("href", ""))
        return None

    def heading_texts(self, level: int) -> tuple[str, ...]:
        """Text of every <hN>, inner markup stripped, empty ones dropped."""
        texts = (" ".join(h.get_text(" ").split()) for h in self.soup.find_all(f"h{level}"))
        return tuple(t for t in texts if t)

    def heading_count(self, level: int) -> int:
        return len(self.soup.find_all(f"h{level}"))

    def json_ld_blocks(self) -> list[str]:
        """Raw text of every JSON-LD script block."""
        scripts = self.soup.find_all(
            "script",
            attrs={"type": re.compile(r"application/ld\+json", re.IGNORECASE)},
        )
        return [script.get_text() for script in scripts]

    def elements_markup(self, name: str) -> list[str]:
        """Serialized markup of every element named `name`."""
        return [str(tag) for tag in self.soup.find_all(name)]

    def image_alt_counts(self) -> tuple[int, int]:
        """(number of <img>, number with a non-empty alt)."""
        images = self.soup.find_all("img")
        with_alt = sum(1 for img in images if (img.get("alt") or "").strip())
        return len(images), with_alt

    def text_input_count(self) -> int:
        return sum(
            1
            for tag in self.soup.find_all("input")
            if (tag.get("type") or "text").strip().lower() in self.TEXT_INPUT_TYPES
        )

    def has_element(self, name: str) -> bool:
        return self.soup.find(name) is not None

    def html_lang(self) -> str | None:
        tag = self.soup.find("html")
        if isinstance(tag, Tag) and tag.has_attr("lang"):
            return tag["lang"]
        return None


def _clean(value: str) -> str | None:
    value = value.strip()
    return value or None
