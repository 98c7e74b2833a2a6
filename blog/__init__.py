"""blog/ -- Blog posts: domain dataclasses, persistence, and ownership rules.

Layer rule: blog/ imports from core/ and auth/ (the users table) only.
It does NOT import from api/.
"""
