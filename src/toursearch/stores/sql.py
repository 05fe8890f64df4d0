"""SQL content stores — substring search over the site's PostgreSQL tables.

The tables are owned by the site's migration scripts; only the columns read
by search are declared here.

Each store projects its own columns onto the shared ``StoreRecord`` shape:

  =========  ===================================  ===================
  source     matched columns                      snippet
  =========  ===================================  ===================
  tours      title, description                   description
  blog       title, excerpt, content (published)  excerpt or content
  projects   title, description                   description
  =========  ===================================  ===================
"""

from __future__ import annotations

import logging
import string
from collections.abc import Sequence
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    ColumnElement,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    func,
    literal,
    null,
    or_,
    select,
    true,
)
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement

from toursearch.models.query import SearchTerm
from toursearch.stores.base import ContentStore, StoreRecord

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class ascii_fold(FunctionElement[str]):
    """Lower-case ASCII letters only, matching ``SearchTerm`` normalization.

    Unlike PostgreSQL's ``lower()``, non-ASCII letters are left untouched.
    """

    type = String()
    name = "ascii_fold"
    inherit_cache = True


@compiles(ascii_fold)
def _ascii_fold_translate(element: ascii_fold, compiler: Any, **kw: Any) -> str:
    arg = compiler.process(element.clauses, **kw)
    return f"translate({arg}, '{string.ascii_uppercase}', '{string.ascii_lowercase}')"


@compiles(ascii_fold, "sqlite")
def _ascii_fold_sqlite(element: ascii_fold, compiler: Any, **kw: Any) -> str:
    # SQLite's built-in lower() folds ASCII only
    return f"lower({compiler.process(element.clauses, **kw)})"


# ── Table definitions ────────────────────────────────────────────────────


def tours_table(metadata: MetaData, name: str = "tours") -> Table:
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(255), nullable=False),
        Column("description", Text),
        Column("image_url", String(500)),
        Column("category", String(100)),
        Column("slug", String(255)),
        Column("created_at", DateTime, server_default=func.now()),
    )


def blog_posts_table(metadata: MetaData, name: str = "blog_posts") -> Table:
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(255), nullable=False),
        Column("excerpt", Text),
        Column("content", Text),
        Column("image_url", String(500)),
        Column("slug", String(255)),
        Column("published", Boolean, server_default=true()),
        Column("created_at", DateTime, server_default=func.now()),
    )


def projects_table(metadata: MetaData, name: str = "projects") -> Table:
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True),
        Column("title", String(255), nullable=False),
        Column("description", Text),
        Column("image_url", String(500)),
        Column("slug", String(255)),
        Column("created_at", DateTime, server_default=func.now()),
    )


# ── Store ────────────────────────────────────────────────────────────────


class SqlContentStore(ContentStore):
    """Content store backed by one SQL table.

    Args:
        engine: Shared async engine.
        table: The table to search.
        match_columns: Columns checked for the substring (ASCII case-insensitive).
        snippet: Expression selected as the record's snippet.
        filters: Extra WHERE clauses every match must satisfy.
        with_category: Select the table's ``category`` column.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table: Table,
        *,
        match_columns: Sequence[ColumnElement[Any]],
        snippet: ColumnElement[Any],
        filters: Sequence[ColumnElement[bool]] = (),
        with_category: bool = False,
    ) -> None:
        if not match_columns:
            raise ValueError("match_columns must not be empty")
        self._engine = engine
        self._table = table
        self._match_columns = list(match_columns)
        self._snippet = snippet
        self._filters = list(filters)
        self._with_category = with_category

    @property
    def name(self) -> str:
        return self._table.name

    def build_query(self, term: SearchTerm, limit: int) -> Any:
        """Build the SELECT for ``term``; exposed for inspection in tests."""
        t = self._table.c
        category = t.category if self._with_category else null()
        matches = or_(
            *(ascii_fold(col).like(term.like_pattern, escape=LIKE_ESCAPE) for col in self._match_columns)
        )
        return (
            select(
                t.id,
                t.title,
                self._snippet.label("snippet"),
                t.image_url,
                t.created_at,
                category.label("category"),
                t.slug,
            )
            .where(matches, *self._filters)
            .order_by(t.created_at.desc(), t.id.desc())
            .limit(limit)
        )

    async def find_by_substring(self, term: SearchTerm, limit: int) -> list[StoreRecord]:
        stmt = self.build_query(term, limit)
        async with self._engine.connect() as conn:
            result = await conn.execute(stmt)
            rows = result.mappings().all()
        logger.debug("Table '%s' returned %d rows for '%s'", self.name, len(rows), term.text)
        return [StoreRecord(**row) for row in rows]  # type: ignore[typeddict-item]

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(select(literal(1)))


# ── Per-source factories ─────────────────────────────────────────────────


def tour_store(engine: AsyncEngine, metadata: MetaData, table_name: str = "tours") -> SqlContentStore:
    table = tours_table(metadata, table_name)
    return SqlContentStore(
        engine,
        table,
        match_columns=[table.c.title, table.c.description],
        snippet=table.c.description,
        with_category=True,
    )


def blog_post_store(engine: AsyncEngine, metadata: MetaData, table_name: str = "blog_posts") -> SqlContentStore:
    table = blog_posts_table(metadata, table_name)
    return SqlContentStore(
        engine,
        table,
        match_columns=[table.c.title, table.c.excerpt, table.c.content],
        snippet=func.coalesce(func.nullif(table.c.excerpt, ""), table.c.content),
        filters=[table.c.published == true()],
    )


def project_store(engine: AsyncEngine, metadata: MetaData, table_name: str = "projects") -> SqlContentStore:
    table = projects_table(metadata, table_name)
    return SqlContentStore(
        engine,
        table,
        match_columns=[table.c.title, table.c.description],
        snippet=table.c.description,
    )
