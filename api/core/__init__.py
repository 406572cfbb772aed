"""
Shared, cross-cutting code for the bookmarks API.

`core/` holds the pieces every feature leans on (DB pool, environment
settings, logging, error handlers). Bookmark SQL and validation live in
`bookmarks/`.
"""
