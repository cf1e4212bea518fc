"""Job notification tracker: match scoring, filtering, status tracking and daily digests."""

__version__ = "0.1.0"
