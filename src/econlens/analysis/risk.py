import logging

import numpy as np
import pandas as pd

from econlens.config import DEFAULT_RISK_WEIGHTS, NEUTRAL_RISK_RATING
from econlens.models.common import AssetCategory, AssetType
from econlens.models.portfolio import (
    DiversificationAnalysis,
    PortfolioAsset,
    RiskProfile,
)

logger = logging.getLogger(__name__)

CATEGORY_CREDIT_WEIGHTS: dict[AssetCategory, float] = {
    AssetCategory.US_LARGE_CAP: 3.0,
    AssetCategory.US_MID_CAP: 4.0,
    AssetCategory.US_SMALL_CAP: 5.0,
    AssetCategory.INTERNATIONAL_DEVELOPED: 4.0,
    AssetCategory.EMERGING_MARKETS: 6.0,
    AssetCategory.GOVERNMENT_BONDS: 1.0,
    AssetCategory.CORPORATE_BONDS: 3.0,
    AssetCategory.HIGH_YIELD_BONDS: 7.0,
    AssetCategory.INTERNATIONAL_BONDS: 3.0,
    AssetCategory.INFLATION_PROTECTED: 1.0,
    AssetCategory.REAL_ESTATE: 5.0,
    AssetCategory.COMMODITIES: 3.0,
    AssetCategory.CASH_EQUIVALENTS: 1.0,
}

TYPE_CREDIT_WEIGHTS: dict[AssetType, float] = {
    AssetType.STOCK: 3.0,
    AssetType.ETF: 3.0,
    AssetType.MUTUAL_FUND: 3.0,
    AssetType.BOND: 3.0,
    AssetType.REIT: 5.0,
    AssetType.COMMODITY: 3.0,
    AssetType.CASH: 1.0,
}

# Checked in order, first prefix match wins.
CREDIT_RATING_LADDER: tuple[tuple[str, float], ...] = (
    ("AAA", 1.0),
    ("AA+", 1.0),
    ("AA", 2.0),
    ("A+", 2.0),
    ("BBB+", 3.0),
    ("BBB", 4.0),
    ("BB", 6.0),
    ("B", 8.0),
    ("A", 3.0),
)


def _clip(value: float, low: float, high: float) -> float:
    return float(min(high, max(low, value)))


def rating_to_credit_weight(rating: str) -> float:
    r = rating.strip().upper()
    for prefix, weight in CREDIT_RATING_LADDER:
        if r.startswith(prefix):
            return weight
    return 10.0


def credit_weight(asset: PortfolioAsset) -> float:
    if asset.asset_type == AssetType.BOND and asset.credit_rating:
        return rating_to_credit_weight(asset.credit_rating)
    if asset.asset_category is not None:
        return CATEGORY_CREDIT_WEIGHTS[asset.asset_category]
    return TYPE_CREDIT_WEIGHTS[asset.asset_type]


def hhi_to_concentration(weights: np.ndarray) -> float:
    """Herfindahl-Hirschman index of fractional weights on a 1-10 scale."""
    hhi = float(np.sum(np.square(weights)))
    return _clip(hhi * 10.0, 1.0, 10.0)


def max_group_share(frame: pd.DataFrame, key: str, normalize: bool) -> float:
    tagged = frame.dropna(subset=[key])
    if tagged.empty:
        return 0.0
    sums = tagged.groupby(key, sort=True)["allocation"].sum()
    top = float(sums.max())
    if normalize:
        total = float(sums.sum())
        if total <= 0:
            return 0.0
        top = top / total * 100.0
    return _clip(top, 0.0, 100.0)


def blend_overall(
    weights: dict[str, float],
    concentration: float,
    volatility: float,
    credit: float,
    geographic: float,
) -> float:
    components = {
        "concentration": concentration,
        "volatility": volatility,
        "credit": credit,
        "geographic": max(1.0, geographic / 10.0),
    }
    total_w = sum(weights.get(k, 0.0) for k in components)
    if total_w <= 0:
        return 1.0
    score = sum(components[k] * weights.get(k, 0.0) for k in components) / total_w
    return _clip(score, 1.0, 10.0)


class ConcentrationRiskScorer:
    def __init__(self, weights: dict[str, float] | None = None) -> None:
        self.weights = (weights or DEFAULT_RISK_WEIGHTS).copy()

    def score(self, assets: list[PortfolioAsset]) -> RiskProfile:
        if not assets:
            raise ValueError("cannot score an empty asset list")

        frame = self._frame(assets)
        alloc = frame["allocation"].to_numpy(dtype=float)
        total_alloc = float(alloc.sum())
        fractions = alloc / 100.0

        concentration = hhi_to_concentration(fractions)
        sector = max_group_share(frame, "sector", normalize=False)
        geographic = max_group_share(frame, "region", normalize=True)

        if total_alloc > 0:
            volatility = float(np.average(frame["risk"], weights=alloc))
            credit = float(np.average(frame["credit"], weights=alloc))
        else:
            logger.warning("Allocations sum to zero, using unweighted averages")
            volatility = float(frame["risk"].mean())
            credit = float(frame["credit"].mean())
        volatility = _clip(volatility, 1.0, 10.0)
        credit = _clip(credit, 1.0, 10.0)

        overall = blend_overall(
            self.weights, concentration, volatility, credit, geographic
        )

        profile = RiskProfile(
            overall_risk_score=round(overall, 4),
            concentration_risk=round(concentration, 4),
            sector_concentration=round(sector, 4),
            geographic_risk=round(geographic, 4),
            volatility_score=round(volatility, 4),
            credit_risk=round(credit, 4),
        )
        logger.debug("Risk profile for %d asset(s): %s", len(assets), profile)
        return profile

    def diversification(self, assets: list[PortfolioAsset]) -> DiversificationAnalysis:
        types = {a.asset_type for a in assets}
        sectors = {a.sector.strip().lower() for a in assets if a.sector}
        regions = {a.geographic_region for a in assets if a.geographic_region}

        type_score = min(10.0, len(types) * 2.0)
        sector_score = min(10.0, len(sectors) * 1.5)
        geo_score = min(10.0, len(regions) * 2.5)
        overall = (type_score + sector_score + geo_score) / 3

        recommendations: list[str] = []
        if type_score < 6:
            recommendations.append("Consider diversifying across more asset types")
        if sector_score < 6:
            recommendations.append("Add exposure to different sectors")
        if geo_score < 6:
            recommendations.append("Consider international diversification")

        return DiversificationAnalysis(
            asset_type_diversification=type_score,
            sector_diversification=sector_score,
            geographic_diversification=geo_score,
            overall_diversification=round(overall, 4),
            recommendations=recommendations,
        )

    def _frame(self, assets: list[PortfolioAsset]) -> pd.DataFrame:
        rows = [
            {
                "allocation": a.allocation_percentage,
                "sector": a.sector.strip().lower() if a.sector else None,
                "region": a.geographic_region.value if a.geographic_region else None,
                "risk": (
                    a.risk_rating
                    if a.risk_rating is not None
                    else NEUTRAL_RISK_RATING
                ),
                "credit": credit_weight(a),
            }
            for a in assets
        ]
        return pd.DataFrame(rows)
