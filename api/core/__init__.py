"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses: the DB pool,
error types, logging setup and image file storage. Feature-specific SQL and
business logic stay in the feature packages (`auth/`, `news/`, `jobs/`).
"""
