"""ORM Models — SQLAlchemy declarative models for persisted risk state.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from exposure_risk.models.risk_state_field import RiskStateField  # noqa: F401
