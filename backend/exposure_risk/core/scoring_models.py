"""Scoring Models — parsed backend configuration and exposure measurements.

Invariants:
    - AttenuationWeights are non-negative multipliers
    - RiskScoreClass.min <= RiskScoreClass.max
    - ScoringConfig.normalization_divisor > 0
    - ExposureMeasurement durations are NOT range-checked (upstream data is trusted as-is)

Design Decisions:
    - Frozen dataclasses, not pydantic: core stays free of boundary libraries;
      schemas/scoring_config.py validates raw input and converts into these
    - Violations raise ValueError at construction, before any score is computed
"""

from dataclasses import dataclass, field

from exposure_risk.core.domain_types import HIGH_RISK_CLASS_LABEL


@dataclass(frozen=True)
class AttenuationWeights:
    """Per-bucket multipliers applied to attenuation durations."""
    low: float
    mid: float
    high: float

    def __post_init__(self):
        for name in ("low", "mid", "high"):
            if getattr(self, name) < 0:
                raise ValueError(f"Attenuation weight '{name}' must be non-negative")


@dataclass(frozen=True)
class RiskScoreClass:
    """One labeled score band, inclusive on both ends."""
    label: str
    min: float
    max: float

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(
                f"Risk score class '{self.label}' has min {self.min} > max {self.max}"
            )


@dataclass(frozen=True)
class RiskScoreClassification:
    """The full set of score bands delivered by the backend."""
    classes: tuple[RiskScoreClass, ...] = field(default_factory=tuple)

    def find(self, label: str) -> RiskScoreClass | None:
        return next((c for c in self.classes if c.label == label), None)

    @property
    def high_class(self) -> RiskScoreClass | None:
        return self.find(HIGH_RISK_CLASS_LABEL)


@dataclass(frozen=True)
class ScoringConfig:
    """Weights, bands and offsets used for one calculation."""
    weights: AttenuationWeights
    classes: RiskScoreClassification
    default_bucket_offset: float
    normalization_divisor: float
    max_attenuation_duration: int

    def __post_init__(self):
        if self.normalization_divisor <= 0:
            raise ValueError("normalization_divisor must be greater than zero")


@dataclass(frozen=True)
class ExposureMeasurement:
    """Exposure summary: minutes per attenuation bucket plus the maximum risk score."""
    low_attenuation_minutes: int
    mid_attenuation_minutes: int
    high_attenuation_minutes: int
    maximum_risk_score: int

    @property
    def attenuation_durations(self) -> tuple[int, int, int]:
        return (
            self.low_attenuation_minutes,
            self.mid_attenuation_minutes,
            self.high_attenuation_minutes,
        )
