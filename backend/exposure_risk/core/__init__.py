"""Core Layer — pure risk scoring, classification and gating logic.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (no IO, no async, no clock reads)

Design Decisions:
    - Functional core separated from imperative shell: services/ awaits the
      collaborators and feeds plain values into core/
"""
