"""
Persistence layer.

One module per collection, each a set of functions issuing
parameterized SQL through ``core.db.get_connection``.
"""
