"""Mod Collection Ranker: fetch, score and rank a user's mod collection."""
