"""Pydantic Schemas — validation for parsed backend configuration and API responses.

Invariants:
    - Schemas validate at system boundary (already-parsed config, API responses)
    - Schemas convert into core dataclasses via to_domain(); core never imports pydantic
"""
