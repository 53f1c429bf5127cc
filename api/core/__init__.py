"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks the feature packages share: the Postgres
pool and the auth provider client. Feature-specific SQL and business logic
live in the feature package (e.g. `jobs/`).
"""
