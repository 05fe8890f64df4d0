"""Content stores — read-only repositories over the site's content tables.

Each source adapter receives one ``ContentStore``; stores share a single
async engine (one connection pool per process).
"""

from toursearch.stores.base import ContentStore, StoreRecord
from toursearch.stores.database import create_store_engine
from toursearch.stores.sql import SqlContentStore, blog_post_store, project_store, tour_store

__all__ = [
    "ContentStore",
    "SqlContentStore",
    "StoreRecord",
    "blog_post_store",
    "create_store_engine",
    "project_store",
    "tour_store",
]
