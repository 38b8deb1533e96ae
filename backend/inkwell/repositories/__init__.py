"""
Inkwell Backend: Persistence Package
=======================================

    base.py: repository Protocols, the Store bundle, PostWithAuthor
    sql.py:  SQLAlchemy implementations and the `get_store` dependency
"""

from inkwell.repositories.base import (
    LikedRepository,
    PostRepository,
    PostWithAuthor,
    Store,
    UserRepository,
)
from inkwell.repositories.sql import SqlStore, get_store

__all__ = [
    "LikedRepository",
    "PostRepository",
    "PostWithAuthor",
    "SqlStore",
    "Store",
    "UserRepository",
    "get_store",
]
