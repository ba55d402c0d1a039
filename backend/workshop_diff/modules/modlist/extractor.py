"""Modlist extractor — recognise Workshop mod references in exported HTML.

Exported subscription/collection pages are loosely structured, so three
independent strategies scan the same text. Each is a pure function returning
``(mod_id, name)`` pairs in document order; duplicates are left in and the
first-seen-wins merge happens in the aggregator.

Priority (fixed):
  1. ``scan_anchors``:    ``<a href=".../filedetails/?id=N">Name</a>``
  2. ``scan_attributes``: ``<div data-publishedfileid="N">Name</div>``
  3. ``scan_bare_ids``:   any ``filedetails/?id=N``, named ``Mod N``
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from bs4 import BeautifulSoup, Tag

Candidate = tuple[str, str]
Strategy = Callable[[str], list[Candidate]]

# ---------------------------------------------------------------------------
# Patterns and selectors
# ---------------------------------------------------------------------------

# ASCII digits only: \d would also accept other Unicode numerals.
_ITEM_URL = r"filedetails/?\?(?:[^\"'<>\s#]*?&(?:amp;)?)?id=(?P<id>[0-9]+)\b"
_ITEM_URL_RE = re.compile(_ITEM_URL, re.IGNORECASE)
_MOD_ID_RE = re.compile(r"[0-9]+")

_ANCHOR_SELECTOR = 'a[href*="filedetails" i]'

# html.parser lowercases attribute names
_ID_ATTRIBUTES = (
    "data-publishedfileid",
    "data-publishedfile-id",
    "data-workshopid",
    "data-workshop-id",
    "data-modid",
    "data-mod-id",
)
_ATTRIBUTE_SELECTOR = ", ".join(f"[{attr}]" for attr in _ID_ATTRIBUTES)


def placeholder_name(mod_id: str) -> str:
    return f"Mod {mod_id}"


def visible_text(el: Tag) -> str:
    """Text of an element and its children, whitespace collapsed."""
    return " ".join(el.get_text(" ", strip=True).split())


def _soup(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def scan_anchors(text: str) -> list[Candidate]:
    """Hyperlinks to a Workshop item with non-empty link text."""
    found: list[Candidate] = []
    for a_tag in _soup(text).select(_ANCHOR_SELECTOR):
        match = _ITEM_URL_RE.search(a_tag.get("href", ""))
        if not match:
            continue
        name = visible_text(a_tag)
        if name:
            found.append((match.group("id"), name))
    return found


def scan_attributes(text: str) -> list[Candidate]:
    """Elements carrying the id in a data attribute, named by their inner text."""
    found: list[Candidate] = []
    for el in _soup(text).select(_ATTRIBUTE_SELECTOR):
        value = next((el.get(attr) for attr in _ID_ATTRIBUTES if el.has_attr(attr)), "")
        mod_id = value.strip() if isinstance(value, str) else ""
        if not _MOD_ID_RE.fullmatch(mod_id):
            continue
        found.append((mod_id, visible_text(el) or placeholder_name(mod_id)))
    return found


def scan_bare_ids(text: str) -> list[Candidate]:
    """Every Workshop item URL, whatever markup surrounds it."""
    return [(m.group("id"), placeholder_name(m.group("id"))) for m in _ITEM_URL_RE.finditer(text)]


STRATEGIES: tuple[Strategy, ...] = (scan_anchors, scan_attributes, scan_bare_ids)


def extract_candidates(text: str) -> Iterator[Candidate]:
    """All candidates of one file: every strategy runs, in priority order."""
    for strategy in STRATEGIES:
        yield from strategy(text)
