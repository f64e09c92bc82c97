from .feed_base import FeedConnector, FeedFetchError, FeedSource
from .news import NigerianNewsConnector, build_news_connector

__all__ = [
    "FeedConnector",
    "FeedFetchError",
    "FeedSource",
    "NigerianNewsConnector",
    "build_news_connector",
]
