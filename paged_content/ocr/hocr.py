"""Word highlight extraction from HOCR markup.

HOCR carries layout in ``title`` attributes, e.g. a word's parent holds
``bbox 120 45 198 70`` and the page container holds
``image "page.tif"; bbox 0 0 2550 3300; ppageno 0``.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from urllib.parse import unquote_plus

from paged_content.config.settings import Settings
from paged_content.logging.logger import Log
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import DatastreamNotFoundError

PAGE_CLASS = "ocr_page"
LAST_WINS = "last_wins"
ERROR = "error"

_LEADING_INT = re.compile(r"^-?\d+")


class HocrPageDimensionError(Exception):
    """Raised when a document has several page containers and that is refused."""


@dataclass(frozen=True)
class BoundingBox:
    left: int
    top: int
    right: int
    bottom: int


@dataclass
class HighlightResult:
    bounding_boxes: list[BoundingBox] = field(default_factory=list)
    width: int | None = None
    height: int | None = None


class HocrHighlightExtractor:
    """Finds word boxes for a search term in a stored HOCR document."""

    def __init__(self, store: BaseRepositoryStore, multiple_pages: str = LAST_WINS) -> None:
        if multiple_pages not in (LAST_WINS, ERROR):
            raise ValueError(
                f"Unknown multiple page policy '{multiple_pages}'. "
                f"Choose from: {[LAST_WINS, ERROR]}"
            )
        self._store = store
        self._multiple_pages = multiple_pages

    @classmethod
    def from_settings(
        cls, store: BaseRepositoryStore, settings: Settings
    ) -> "HocrHighlightExtractor":
        return cls(store, multiple_pages=settings.hocr_multiple_pages)

    def get_highlights(
        self,
        object_id: str,
        term: str,
        hocr_dsid: str = "HOCR",
    ) -> HighlightResult:
        """Return boxes of every word matching any whitespace-separated part of ``term``.

        Matching is case-insensitive and exact per word. A missing or
        malformed datastream yields an empty result.
        """
        try:
            datastream = self._store.read_datastream(object_id, hocr_dsid)
        except DatastreamNotFoundError:
            return HighlightResult()
        return self.extract(datastream.content, term)

    def extract(self, markup: bytes | str, term: str) -> HighlightResult:
        try:
            root = ET.fromstring(markup)
        except ET.ParseError as exc:
            Log.warning(f"Unparsable HOCR: {exc}")
            return HighlightResult()

        parents = {child: parent for parent in root.iter() for child in parent}
        result = HighlightResult()
        for sub_term in unquote_plus(term).lower().split():
            for element in root.iter():
                if (element.text or "").strip().lower() != sub_term:
                    continue
                parent = parents.get(element)
                box = _parse_bbox(parent.get("title", "")) if parent is not None else None
                if box is not None:
                    result.bounding_boxes.append(box)

        self._read_page_dimensions(root, result)
        return result

    def _read_page_dimensions(self, root: ET.Element, result: HighlightResult) -> None:
        pages = [
            element
            for element in root.iter()
            if PAGE_CLASS in element.get("class", "").split()
        ]
        if len(pages) > 1 and self._multiple_pages == ERROR:
            raise HocrPageDimensionError(f"HOCR holds {len(pages)} pages, expected one")
        for page in pages:
            tokens = page.get("title", "").split()
            result.width = _int_token(tokens, 5)
            result.height = _int_token(tokens, 6)


def _parse_bbox(title: str) -> BoundingBox | None:
    # Token 0 is the literal "bbox".
    tokens = title.split()
    values = [_int_token(tokens, index) for index in range(1, 5)]
    if any(value is None for value in values):
        return None
    left, top, right, bottom = values
    return BoundingBox(left=left, top=top, right=right, bottom=bottom)  # type: ignore[arg-type]


def _int_token(tokens: list[str], index: int) -> int | None:
    """Read the leading integer of a token, tolerating a trailing ``;``."""
    if index >= len(tokens):
        return None
    match = _LEADING_INT.match(tokens[index])
    return int(match.group()) if match else None
