"""
Feature modules for the dashboard backend.

- auth: session tokens and page route protection
- users: accounts and profiles over the users table
- feeds: weather, geocoding, news and trending repositories

Each module keeps its Protocol interfaces, pydantic models, service,
routes and exceptions together. Routes reach services through the
api.dependencies container, never directly.
"""
