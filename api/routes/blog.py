"""
api/routes/blog.py -- Blog CRUD routes.

Routes:
  GET    /blog/getAll?offset=N      -- page of 10, most recently updated first
  GET    /blog/getArticle?id=ID     -- single blog
  POST   /blog/createBlog           -- create (owner taken from body userId)
  PUT    /blog/updateBlog?id=ID     -- update (Bearer + ownership)
  DELETE /blog/deleteBlog?id=ID     -- delete (Bearer + ownership)

Auth policy:
  Reads are public. When a valid token is present anyway, each blog's
  isEditable flag reports whether the caller owns it (soft auth, never 401).
  createBlog is public and trusts the body's userId.
  updateBlog/deleteBlog require get_current_subject (401) and then the
  ownership check in blog.service (403).

The id query parameter is optional at the FastAPI level so a missing id is
reported as 400 "Blog ID is required" after authentication, not as a 422.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from api.models import BlogCreate, BlogResponse, BlogUpdate, DeleteResponse
from auth.dependencies import get_current_subject, try_get_current_subject
from blog import service as blog_service
from blog.store import BlogStore

router = APIRouter()

# Largest OFFSET SQLite can bind (signed 64-bit INTEGER).
_MAX_OFFSET = 2**63 - 1


@router.get("/blog/getAll", response_model=list[BlogResponse])
def get_all_blogs(
    request: Request,
    offset: int = Query(default=0, ge=0, le=_MAX_OFFSET),
    subject_id: Optional[str] = Depends(try_get_current_subject),
) -> list[BlogResponse]:
    """Return one page of blogs with author names, newest update first."""
    store: BlogStore = request.app.state.blog_store
    return [BlogResponse.from_blog(b, subject_id) for b in blog_service.list_blogs(store, offset)]


@router.get("/blog/getArticle", response_model=BlogResponse)
def get_article(
    request: Request,
    blog_id: Optional[str] = Query(default=None, alias="id"),
    subject_id: Optional[str] = Depends(try_get_current_subject),
) -> BlogResponse:
    store: BlogStore = request.app.state.blog_store
    return BlogResponse.from_blog(blog_service.get_blog(store, blog_id), subject_id)


@router.post("/blog/createBlog", response_model=BlogResponse, status_code=201)
def create_blog(request: Request, body: BlogCreate) -> BlogResponse:
    """Create a blog for body.user_id. Unknown user IDs fail with 500."""
    store: BlogStore = request.app.state.blog_store
    created = blog_service.create_blog(
        store,
        title=body.title,
        user_id=body.user_id,
        description=body.description,
        img_src=body.img_src,
    )
    return BlogResponse.from_blog(created)


@router.put("/blog/updateBlog", response_model=BlogResponse)
def update_blog(
    request: Request,
    body: BlogUpdate,
    blog_id: Optional[str] = Query(default=None, alias="id"),
    subject_id: str = Depends(get_current_subject),
) -> BlogResponse:
    """Update title, description, and/or imgSrc on a blog the caller owns."""
    store: BlogStore = request.app.state.blog_store
    changes = body.model_dump(exclude_unset=True)
    updated = blog_service.update_blog(store, blog_id, subject_id, **changes)
    return BlogResponse.from_blog(updated, subject_id)


@router.delete("/blog/deleteBlog", response_model=DeleteResponse)
def delete_blog(
    request: Request,
    blog_id: Optional[str] = Query(default=None, alias="id"),
    subject_id: str = Depends(get_current_subject),
) -> DeleteResponse:
    """Delete a blog the caller owns. A second delete of the same ID is a 404."""
    store: BlogStore = request.app.state.blog_store
    deleted_id = blog_service.delete_blog(store, blog_id, subject_id)
    return DeleteResponse(message="Blog deleted successfully", id=deleted_id)
