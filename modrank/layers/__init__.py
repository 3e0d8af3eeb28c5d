"""Layers package initialization."""
from modrank.layers.stat_parser import parse_stat, parse_stat_lenient
from modrank.layers.page_count import PageCountResolver
from modrank.layers.page_worker import PageWorker
from modrank.layers.aggregator import CollectionAggregator
from modrank.layers.scorer import Scorer, round_half_away_from_zero, score_value
from modrank.layers.ranker import rank
from modrank.layers.collection import ModCollectionPipeline

__all__ = [
    "parse_stat",
    "parse_stat_lenient",
    "PageCountResolver",
    "PageWorker",
    "CollectionAggregator",
    "Scorer",
    "round_half_away_from_zero",
    "score_value",
    "rank",
    "ModCollectionPipeline",
]
