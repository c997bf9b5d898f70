"""Infrastructure Layer — storage, configuration and notification adapters.

Invariants:
    - Infrastructure never imports from services/
    - All storage failures mapped to PersistenceError (core/errors.py)
"""
