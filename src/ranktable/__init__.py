"""ranktable - render JSONL leaderboards as HTML or terminal tables."""

__version__ = "0.1.0"
