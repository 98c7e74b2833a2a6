"""
blog/store.py -- SQLAlchemy-backed persistence layer for blog posts.

Uses SQLAlchemy Core (not ORM) so the dataclasses in blog/models.py remain
the authoritative domain representation.

Pattern: Repository + Data Mapper. BlogStore is the repository; _row_to_blog
is the mapper. Services never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Integrity: blogs.user_id is a real FOREIGN KEY to users.id (SQLite enforces
it because core/db.py turns on PRAGMA foreign_keys). Inserting a blog for an
unknown user raises IntegrityError.

Usage:
    store = BlogStore(engine)
    blog_id = store.create_blog(Blog(title="Hello", user_id=user_id))
    page = store.list_blogs(offset=0)
    store.update_blog(blog_id, title="Hello again")
    store.delete_blog(blog_id)
"""

import uuid
from typing import Optional

from sqlalchemy import Column, ForeignKey, String, Table, Text, select
from sqlalchemy.engine import Engine

from auth.store import users
from blog.models import Author, Blog
from core.db import metadata, now_iso

PAGE_SIZE = 10

# Fields update_blog() may touch. Owner and timestamps are not in this set.
_MUTABLE_FIELDS = {"title", "description", "img_src"}

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

blogs = Table(
    "blogs",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("img_src", Text),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False, index=True),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False, index=True),
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class BlogStore:
    """Repository for Blog entities."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine, tables=[users, blogs])

    def _select_with_author(self):
        return select(
            blogs,
            users.c.first_name.label("author_first_name"),
            users.c.last_name.label("author_last_name"),
        ).select_from(blogs.outerjoin(users, blogs.c.user_id == users.c.id))

    def create_blog(self, blog: Blog) -> str:
        """Insert a new blog and return its generated ID.

        Raises sqlalchemy.exc.IntegrityError if user_id does not reference a user.
        """
        blog_id = str(uuid.uuid4())
        stamp = now_iso()
        with self.engine.connect() as conn:
            conn.execute(
                blogs.insert().values(
                    id=blog_id,
                    title=blog.title,
                    description=blog.description,
                    img_src=blog.img_src,
                    user_id=blog.user_id,
                    created_at=stamp,
                    updated_at=stamp,
                )
            )
            conn.commit()
        return blog_id

    def get_blog(self, blog_id: str) -> Optional[Blog]:
        """Return the blog with its author summary, or None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(self._select_with_author().where(blogs.c.id == blog_id)).fetchone()
        return _row_to_blog(row) if row is not None else None

    def list_blogs(self, offset: int = 0, limit: int = PAGE_SIZE) -> list[Blog]:
        """Return one page of blogs, most recently updated first."""
        query = (
            self._select_with_author()
            .order_by(blogs.c.updated_at.desc(), blogs.c.id)
            .offset(max(offset, 0))
            .limit(limit)
        )
        with self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_blog(r) for r in rows]

    def update_blog(self, blog_id: str, **fields) -> bool:
        """Update title/description/img_src and bump updated_at.

        Unknown field names raise ValueError rather than being ignored.
        Returns True if a row was updated, False if blog_id was not found.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown blog fields: {unknown!r}")
        with self.engine.connect() as conn:
            result = conn.execute(
                blogs.update().where(blogs.c.id == blog_id).values(**fields, updated_at=now_iso())
            )
            conn.commit()
        return result.rowcount > 0

    def delete_blog(self, blog_id: str) -> bool:
        """Permanently delete a blog. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(blogs.delete().where(blogs.c.id == blog_id))
            conn.commit()
        return result.rowcount > 0


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_blog(row) -> Blog:
    return Blog(
        id=row.id,
        title=row.title,
        description=row.description,
        img_src=row.img_src,
        user_id=row.user_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        author=Author(
            id=row.user_id,
            first_name=row.author_first_name,
            last_name=row.author_last_name,
        ),
    )
