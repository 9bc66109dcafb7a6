"""
Pydantic schema definitions for API payloads.

Each domain (reports, users) defines its own Pydantic models for
request and response bodies.  Schemas are separated from the database
rows to decouple the API representation (camelCase JSON) from
persistence (snake_case columns).
"""
