"""
Pydantic schema definitions for API payloads.

Each domain defines its own Pydantic models for request and response
bodies.  Schemas are separated from database rows to decouple API
representation from persistence.
"""
