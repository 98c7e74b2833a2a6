"""
blog/service.py -- Blog operations, including the ownership-checked mutations.

update_blog() and delete_blog() run the same sequence after the auth gate
has produced subject_id:

  1. blog_id present                      else BadRequest  (400)
  2. blog exists                          else NotFound    (404)
  3. blog.user_id == subject_id           else Forbidden   (403)
  4. mutate via BlogStore                 on DB error InternalError (500)

A DB error while loading the blog in step 2 is also an InternalError.

The ownership comparison happens before any write, so a rejected caller
never changes the row.

create_blog() takes user_id from the caller as-is. It is not bound to an
authenticated subject; see DESIGN.md.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from blog.models import Blog
from blog.store import BlogStore
from core.errors import BadRequest, Forbidden, InternalError, NotFound

logger = logging.getLogger("inkpost.blog")


def _require_id(blog_id: Optional[str]) -> str:
    if blog_id is None or not blog_id.strip():
        raise BadRequest("Blog ID is required")
    return blog_id.strip()


def _load_owned(store: BlogStore, blog_id: Optional[str], subject_id: str, failure_message: str) -> Blog:
    """Steps 1-3 of the mutation flow. Returns the blog the subject owns."""
    blog_id = _require_id(blog_id)
    try:
        blog = store.get_blog(blog_id)
    except SQLAlchemyError as exc:
        logger.exception("Loading blog %s failed", blog_id)
        raise InternalError(failure_message, detail=str(exc)) from exc
    if blog is None:
        raise NotFound("Blog not found")
    if blog.user_id != subject_id:
        logger.warning("User %s denied write access to blog %s", subject_id, blog_id)
        raise Forbidden("You can only modify your own blog posts")
    return blog


# ---------------------------------------------------------------------------
# Public reads and create
# ---------------------------------------------------------------------------


def list_blogs(store: BlogStore, offset: int = 0) -> list[Blog]:
    return store.list_blogs(offset=offset)


def get_blog(store: BlogStore, blog_id: Optional[str]) -> Blog:
    """Fetch a single blog by ID.

    Raises BadRequest for a missing ID, NotFound if absent, InternalError on
    a database failure.
    """
    blog_id = _require_id(blog_id)
    try:
        blog = store.get_blog(blog_id)
    except SQLAlchemyError as exc:
        logger.exception("Fetching blog %s failed", blog_id)
        raise InternalError("Error fetching article", detail=str(exc)) from exc
    if blog is None:
        raise NotFound("Article not found")
    return blog


def create_blog(
    store: BlogStore,
    title: str,
    user_id: str,
    description: Optional[str] = None,
    img_src: Optional[str] = None,
) -> Blog:
    """Create a blog owned by user_id. An unknown user_id is a 500, like any DB failure."""
    try:
        blog_id = store.create_blog(Blog(title=title, user_id=user_id, description=description, img_src=img_src))
        created = store.get_blog(blog_id)
    except SQLAlchemyError as exc:
        logger.exception("Creating blog for user %s failed", user_id)
        raise InternalError("Error creating blog", detail=str(exc)) from exc
    if created is None:
        raise InternalError("Error creating blog", detail="Blog not found after write.")
    logger.info("User %s created blog %s", user_id, blog_id)
    return created


# ---------------------------------------------------------------------------
# Ownership-checked mutations
# ---------------------------------------------------------------------------


def update_blog(store: BlogStore, blog_id: Optional[str], subject_id: str, **changes) -> Blog:
    """Apply changes (title, description, img_src) to a blog the subject owns.

    Only keys present in changes are written. An empty changes dict is a
    BadRequest. Returns the updated blog.
    """
    blog = _load_owned(store, blog_id, subject_id, "Error updating blog")
    if not changes:
        raise BadRequest("No fields to update.")
    try:
        updated = store.update_blog(blog.id, **changes)
        fresh = store.get_blog(blog.id) if updated else None
    except SQLAlchemyError as exc:
        logger.exception("Updating blog %s failed", blog.id)
        raise InternalError("Error updating blog", detail=str(exc)) from exc
    if fresh is None:
        # Deleted between the ownership check and the write.
        raise NotFound("Blog not found")
    logger.info("User %s updated blog %s", subject_id, blog.id)
    return fresh


def delete_blog(store: BlogStore, blog_id: Optional[str], subject_id: str) -> str:
    """Delete a blog the subject owns. Returns the deleted blog's ID."""
    blog = _load_owned(store, blog_id, subject_id, "Error deleting blog")
    try:
        deleted = store.delete_blog(blog.id)
    except SQLAlchemyError as exc:
        logger.exception("Deleting blog %s failed", blog.id)
        raise InternalError("Error deleting blog", detail=str(exc)) from exc
    if not deleted:
        raise NotFound("Blog not found")
    logger.info("User %s deleted blog %s", subject_id, blog.id)
    return blog.id
