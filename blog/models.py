"""
blog/models.py -- Domain dataclasses for blog posts.

These are pure data containers with zero logic. Ownership rules live in
blog/service.py; persistence lives in blog/store.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Author:
    """Public summary of a blog's owner, joined in from the users table."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass
class Blog:
    """A short article owned by one user.

    user_id is the owner reference. It is set on creation and never changed
    by update_blog(); only the owner may edit or delete the post.

    id is None before the record is written to the database.
    """

    title: str
    user_id: str
    description: Optional[str] = None
    img_src: Optional[str] = None
    id: Optional[str] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""  # ISO 8601, bumped by store on every update
    author: Optional[Author] = None
