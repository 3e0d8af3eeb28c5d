"""
Field extractor over a parsed listing document.
Wraps BeautifulSoup CSS selection so the layers only ask for named fields:
first-match text, first-match attribute, element counts and scoped iteration.
"""
from typing import Iterator, Optional, Union

from bs4 import BeautifulSoup, Tag


class FieldExtractor:
    """Named-field lookups over a document or a single element of it."""

    def __init__(self, node: Union[BeautifulSoup, Tag]):
        self.node = node

    @classmethod
    def from_html(cls, html: str) -> "FieldExtractor":
        return cls(BeautifulSoup(html, "lxml"))

    def text(self, selector: str) -> str:
        """Stripped text of the first match, or "" if nothing matches."""
        element = self.node.select_one(selector)
        if element is None:
            return ""
        return element.get_text().strip()

    def attr(self, name: str, selector: Optional[str] = None) -> Optional[str]:
        """
        Attribute of the first match (or of this node when no selector).

        Returns None when the element or the attribute is missing.
        """
        element = self.node if selector is None else self.node.select_one(selector)
        if element is None:
            return None
        value = element.get(name)
        if isinstance(value, list):
            # Multi-valued attributes such as class
            return " ".join(value)
        return value

    def count(self, selector: str) -> int:
        return len(self.node.select(selector))

    def each(self, selector: str) -> Iterator["FieldExtractor"]:
        """Yield a scoped extractor for every match, in document order."""
        for element in self.node.select(selector):
            yield FieldExtractor(element)
