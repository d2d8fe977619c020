"""
database — ORM models, session factory and persistence helpers.
"""
