"""
Error taxonomy for the Mod Collection Ranker.

FetchError and FormatError raised while resolving the page count abort the
run. ParseError is recovered where a stat is parsed. A FetchError raised by a
single page worker only removes that page from the result.
"""
from typing import List, Optional


class ModRankError(Exception):
    """Base class for all collection pipeline errors."""


class FetchError(ModRankError):
    """A listing page could not be retrieved."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {reason}")


class FormatError(ModRankError):
    """An expected structural marker was missing or malformed."""

    def __init__(self, what: str, detail: str = ""):
        self.what = what
        self.detail = detail
        message = f"Unexpected format for {what}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ParseError(ModRankError, ValueError):
    """A numeric stat value could not be parsed."""

    def __init__(self, label: str, raw_value: str):
        self.label = label
        self.raw_value = raw_value
        super().__init__(f"Could not parse value {raw_value!r} for stat {label!r}")


class PartialCollectionError(ModRankError):
    """Raised on demand when some listing pages failed during a run."""

    def __init__(self, user: str, failed_pages: List[int]):
        self.user = user
        self.failed_pages = failed_pages
        pages = ", ".join(str(p) for p in failed_pages)
        super().__init__(f"Collection for {user} is incomplete; failed pages: {pages}")
