"""Adapters package initialization."""
from modrank.adapters.field_extractor import FieldExtractor
from modrank.adapters.listing_client import ListingClient

__all__ = ["FieldExtractor", "ListingClient"]
