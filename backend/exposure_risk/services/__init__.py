"""Services Layer — async orchestration of the risk-level calculation cycle.

Invariants:
    - Services own every await on external collaborators
    - Pure decisions are delegated to core/; services never re-implement them
"""
