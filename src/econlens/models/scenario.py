from pydantic import ConfigDict, Field, model_validator

from econlens.models.common import ApiModel, AssetCategory, ScenarioId
from econlens.models.validation import ValidationFinding


class ScenarioDefinition(ApiModel):
    model_config = ConfigDict(frozen=True)

    id: ScenarioId
    name: str
    description: str
    duration: str
    frequency: str
    historical_context: tuple[str, ...] = ()


class ScenarioImpactFactor(ApiModel):
    model_config = ConfigDict(frozen=True)

    scenario: ScenarioId
    asset_category: AssetCategory | None
    impact_range: tuple[float, float]
    primary_drivers: tuple[str, ...] = ()
    volatility_multiplier: float = Field(default=1.0, ge=0.0)
    correlation_adjustment: float = 0.0

    @model_validator(mode="after")
    def _check_range(self) -> "ScenarioImpactFactor":
        low, high = self.impact_range
        if low > high:
            raise ValueError(f"impact range min {low} exceeds max {high}")
        return self

    @property
    def midpoint(self) -> float:
        return (self.impact_range[0] + self.impact_range[1]) / 2

    @property
    def width(self) -> float:
        return self.impact_range[1] - self.impact_range[0]


class AssetImpactResult(ApiModel):
    symbol: str
    name: str
    asset_category: AssetCategory | None = None
    impact_percentage: float
    impact_dollar: float
    confidence_level: float = Field(ge=0.0, le=100.0)
    primary_drivers: list[str] = []

    base_impact: float = 0.0
    sector_adjustment: float = 0.0
    quality_adjustment: float = 0.0
    clipped: bool = False
    category_fallback: bool = False


class RiskChangeAnalysis(ApiModel):
    risk_score_change: float = 0.0
    concentration_risk_change: float = 0.0
    volatility_change: float = 0.0
    correlation_changes: dict[str, float] = {}


class ScenarioAnalysisResult(ApiModel):
    portfolio_id: str | None = None
    scenario_id: ScenarioId
    scenario_name: str = ""
    catalog_version: str = ""
    total_impact_percentage: float
    total_impact_dollar: float
    confidence_score: float = Field(ge=0.0, le=100.0)
    asset_level_impacts: list[AssetImpactResult] = []
    portfolio_risk_changes: RiskChangeAnalysis = Field(
        default_factory=RiskChangeAnalysis
    )
    findings: list[ValidationFinding] = []
