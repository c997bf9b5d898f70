"""Scoring Config Schemas — pydantic validation of already-parsed backend configuration.

Invariants:
    - Weights non-negative; every class has min <= max; exactly one "HIGH" class
    - normalization_divisor > 0
    - to_domain() is the only way parsed configuration reaches core/

Design Decisions:
    - model_validator for cross-field rules: single error list for the whole document
"""

from pydantic import BaseModel, Field, model_validator

from exposure_risk.core.domain_types import HIGH_RISK_CLASS_LABEL
from exposure_risk.core.scoring_models import (
    AttenuationWeights, RiskScoreClass, RiskScoreClassification, ScoringConfig,
)


class AttenuationWeightsSchema(BaseModel):
    low: float = Field(ge=0)
    mid: float = Field(ge=0)
    high: float = Field(ge=0)


class RiskScoreClassSchema(BaseModel):
    label: str = Field(min_length=1)
    min: float
    max: float

    @model_validator(mode="after")
    def check_bounds(self) -> "RiskScoreClassSchema":
        if self.min > self.max:
            raise ValueError(f"class '{self.label}': min must not exceed max")
        return self


class ScoringConfigSchema(BaseModel):
    """Attenuation parameters and risk score classes as delivered by the backend."""
    weights: AttenuationWeightsSchema
    risk_score_classes: list[RiskScoreClassSchema]
    default_bucket_offset: float = 0
    normalization_divisor: float = Field(gt=0)
    max_attenuation_duration: int = Field(default=30, ge=0)

    @model_validator(mode="after")
    def check_single_high_class(self) -> "ScoringConfigSchema":
        high = [c for c in self.risk_score_classes if c.label == HIGH_RISK_CLASS_LABEL]
        if len(high) != 1:
            raise ValueError(
                f"risk_score_classes must contain exactly one '{HIGH_RISK_CLASS_LABEL}' "
                f"class, found {len(high)}"
            )
        return self

    def to_domain(self) -> ScoringConfig:
        return ScoringConfig(
            weights=AttenuationWeights(
                low=self.weights.low, mid=self.weights.mid, high=self.weights.high,
            ),
            classes=RiskScoreClassification(tuple(
                RiskScoreClass(label=c.label, min=c.min, max=c.max)
                for c in self.risk_score_classes
            )),
            default_bucket_offset=self.default_bucket_offset,
            normalization_divisor=self.normalization_divisor,
            max_attenuation_duration=self.max_attenuation_duration,
        )
