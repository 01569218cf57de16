"""Infrastructure Layer: store handle and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from repositories/
    - Store failures leave this layer already classified (core/errors.py)
"""
