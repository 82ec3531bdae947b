from pydantic import Field, field_validator

from econlens.models.common import ApiModel, AssetCategory, AssetType, Region


class CandidateAsset(ApiModel):
    symbol: str | None = None
    name: str | None = None
    asset_type: str | None = None
    asset_category: str | None = None
    sector: str | None = None
    geographic_region: str | None = None
    allocation_percentage: float | None = None
    dollar_amount: float | None = None
    shares: float | None = None
    avg_purchase_price: float | None = None
    expense_ratio: float | None = None
    dividend_yield: float | None = None
    credit_rating: str | None = None
    volatility: float | None = None
    risk_rating: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        # CSV-style input sends "" for empty cells
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PortfolioSubmission(ApiModel):
    id: str | None = None
    name: str = ""
    description: str | None = None
    total_value: float = 0.0
    currency: str = "USD"
    assets: list[CandidateAsset] = []


class PortfolioAsset(ApiModel):
    symbol: str
    name: str
    asset_type: AssetType
    asset_category: AssetCategory | None = None
    sector: str | None = None
    geographic_region: Region | None = None
    allocation_percentage: float
    dollar_amount: float
    shares: float | None = None
    avg_purchase_price: float | None = None
    expense_ratio: float | None = None
    dividend_yield: float | None = None
    credit_rating: str | None = None
    volatility: float | None = None
    risk_rating: float | None = None


class RiskProfile(ApiModel):
    overall_risk_score: float = Field(ge=1.0, le=10.0)
    concentration_risk: float = Field(ge=1.0, le=10.0)
    sector_concentration: float = Field(ge=0.0, le=100.0)
    geographic_risk: float = Field(ge=0.0, le=100.0)
    volatility_score: float = Field(ge=1.0, le=10.0)
    credit_risk: float = Field(ge=1.0, le=10.0)


class DiversificationAnalysis(ApiModel):
    asset_type_diversification: float = 0.0
    sector_diversification: float = 0.0
    geographic_diversification: float = 0.0
    overall_diversification: float = 0.0
    recommendations: list[str] = []


class Portfolio(ApiModel):
    id: str | None = None
    name: str
    description: str | None = None
    total_value: float
    currency: str = "USD"
    assets: list[PortfolioAsset]
    risk_profile: RiskProfile | None = None
