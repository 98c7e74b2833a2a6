"""auth/ -- Authentication and authorization package for Inkpost.

Layer rule: auth/ imports only core/ + third-party libraries.
It does NOT import from api/ or blog/.
api/ and blog/ import from auth/, not the other way around.
"""
