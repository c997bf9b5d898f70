"""Static Scoring Config Provider — serves configuration another component already fetched.

Invariants:
    - Input is validated through ScoringConfigSchema before the first calculation
    - replace() swaps the configuration atomically; in-flight cycles keep the old object

Design Decisions:
    - Fetching and refreshing the backend document is the caller's job; this provider
      only holds the latest parsed value
"""

import logging
from typing import Any

from exposure_risk.core.scoring_models import ScoringConfig
from exposure_risk.schemas.scoring_config import ScoringConfigSchema

logger = logging.getLogger(__name__)


class StaticScoringConfigProvider:
    """Holds the most recent ScoringConfig."""

    def __init__(self, config: ScoringConfig):
        self._config = config

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "StaticScoringConfigProvider":
        return cls(ScoringConfigSchema.model_validate(document).to_domain())

    def replace(self, config: ScoringConfig) -> None:
        logger.info("Scoring configuration replaced")
        self._config = config

    async def get_scoring_config(self) -> ScoringConfig:
        return self._config
