"""Exposure Risk Package — risk-level calculation core with transactional persistence.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
