"""API Layer — read-only FastAPI surface over the persisted risk state.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - No endpoint triggers a calculation; scheduling belongs to the caller
"""
