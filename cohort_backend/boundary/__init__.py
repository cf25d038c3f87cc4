"""
Boundary layer for external system integrations.

Handles all interactions with the relational database: ORM models, CRUD
singletons and async connection management.
"""
