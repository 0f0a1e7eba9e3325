"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services talk
to repositories rather than to the database directly, so persistence
can be swapped without changing API handlers.
"""
