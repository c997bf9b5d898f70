"""Risk State Schemas — API response for the persisted risk classification."""

from datetime import datetime

from pydantic import BaseModel

from exposure_risk.core.domain_types import RiskLevel
from exposure_risk.core.risk_state import PersistedRiskState


class RiskStateResponse(BaseModel):
    risk_level: RiskLevel
    risk_level_code: int
    is_decided: bool
    last_calculation_timestamp: datetime | None = None

    @classmethod
    def from_state(cls, state: PersistedRiskState) -> "RiskStateResponse":
        return cls(
            risk_level=state.last_score,
            risk_level_code=state.last_score.code,
            is_decided=state.last_score.is_decided,
            last_calculation_timestamp=state.last_calculation_timestamp,
        )
