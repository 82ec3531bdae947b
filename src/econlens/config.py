from pydantic import BaseModel, Field

VALIDATION_LIMITS: dict[str, float] = {
    "max_allocation_single_asset": 80.0,
    "max_cash_allocation": 50.0,
    "max_assets_per_portfolio": 50,
    "min_assets_per_portfolio": 1,
    "allocation_tolerance": 0.01,
    "dollar_tolerance": 0.01,
    "max_dollar_amount": 1_000_000_000.0,
    "max_symbol_length": 20,
    "max_name_length": 200,
    "max_description_length": 1000,
}

DEFAULT_RISK_WEIGHTS: dict[str, float] = {
    "concentration": 0.35,
    "volatility": 0.35,
    "credit": 0.20,
    "geographic": 0.10,
}

NEUTRAL_RISK_RATING = 5.0


class EngineConfig(BaseModel):
    allocation_tolerance: float = VALIDATION_LIMITS["allocation_tolerance"]
    dollar_tolerance: float = VALIDATION_LIMITS["dollar_tolerance"]
    min_assets: int = int(VALIDATION_LIMITS["min_assets_per_portfolio"])
    max_assets: int = int(VALIDATION_LIMITS["max_assets_per_portfolio"])
    max_dollar_amount: float = VALIDATION_LIMITS["max_dollar_amount"]
    max_single_allocation: float = VALIDATION_LIMITS["max_allocation_single_asset"]
    max_cash_allocation: float = VALIDATION_LIMITS["max_cash_allocation"]

    risk_weights: dict[str, float] = Field(
        default_factory=lambda: DEFAULT_RISK_WEIGHTS.copy()
    )
    correlation_top_n: int = Field(default=3, ge=2)
