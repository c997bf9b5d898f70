"""Risk State Route — read-only view of the persisted risk classification.

Invariants:
    - GET only; writes happen exclusively through RiskStateUpdater
    - Storage failures surface as PersistenceError → 503 via the global handler
"""

from fastapi import APIRouter, Depends

from exposure_risk.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from exposure_risk.infrastructure.risk_state_store import SqlRiskStateStore
from exposure_risk.schemas.risk_state import RiskStateResponse

router = APIRouter(prefix="/api/v1/risk", tags=["risk"])


def get_risk_state_store(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlRiskStateStore:
    return SqlRiskStateStore(manager)


@router.get("/state", response_model=RiskStateResponse)
async def read_risk_state(
    store: SqlRiskStateStore = Depends(get_risk_state_store),
) -> RiskStateResponse:
    return RiskStateResponse.from_state(await store.get_state())
