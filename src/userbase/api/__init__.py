"""API layer: the surface application code uses to work with users.

Key rules:

1. No SQLAlchemy imports - only call UserRepository methods
2. No filtering/sorting of its own - search semantics live in the repository
3. Return Pydantic models only; passwords never leave this layer
"""
