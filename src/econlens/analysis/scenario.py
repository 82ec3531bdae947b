import logging
from itertools import combinations

import numpy as np

from econlens.analysis.adjustments import quality_adjustment, sector_adjustment
from econlens.analysis.catalog import ScenarioCatalog, get_catalog
from econlens.analysis.risk import (
    ConcentrationRiskScorer,
    blend_overall,
    hhi_to_concentration,
)
from econlens.config import NEUTRAL_RISK_RATING, EngineConfig
from econlens.models.common import ScenarioId
from econlens.models.portfolio import PortfolioAsset, RiskProfile
from econlens.models.scenario import (
    AssetImpactResult,
    RiskChangeAnalysis,
    ScenarioAnalysisResult,
    ScenarioImpactFactor,
)
from econlens.models.validation import FindingKind, Severity, ValidationFinding

logger = logging.getLogger(__name__)

NEUTRAL_BASE_CONFIDENCE = 30.0
FALLBACK_PENALTY = 15.0
CLIP_PENALTY = 10.0
MISSING_METADATA_PENALTY = 5.0
RISK_PENALTY_THRESHOLD = 7.0
RISK_PENALTY_PER_POINT = 2.0


def base_confidence(factor: ScenarioImpactFactor) -> float:
    if factor.asset_category is None:
        return NEUTRAL_BASE_CONFIDENCE
    width = factor.width
    if width <= 10:
        return 90.0
    if width <= 20:
        return 80.0
    if width <= 30:
        return 70.0
    return 60.0


class ScenarioImpactEngine:
    def __init__(
        self,
        catalog: ScenarioCatalog | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._catalog = catalog
        self.config = config or EngineConfig()
        self.scorer = ConcentrationRiskScorer(self.config.risk_weights)

    @property
    def catalog(self) -> ScenarioCatalog:
        # Read the active catalog per call so a swap is picked up whole.
        return self._catalog if self._catalog is not None else get_catalog()

    def analyze(
        self,
        assets: list[PortfolioAsset],
        scenario_id: str | ScenarioId,
        risk_profile: RiskProfile | None = None,
        portfolio_id: str | None = None,
    ) -> ScenarioAnalysisResult:
        catalog = self.catalog
        scenario = catalog.scenario(scenario_id)
        if not assets:
            raise ValueError("cannot analyze an empty asset list")
        if risk_profile is None:
            risk_profile = self.scorer.score(assets)

        logger.debug(
            "Analyzing %d asset(s) under %s (catalog %s)",
            len(assets),
            scenario.id.value,
            catalog.version,
        )

        impacts: list[AssetImpactResult] = []
        factors: list[ScenarioImpactFactor] = []
        findings: list[ValidationFinding] = []
        for i, asset in enumerate(assets):
            factor, fallback_reason = catalog.resolve(scenario.id, asset)
            if fallback_reason is not None:
                findings.append(
                    ValidationFinding(
                        kind=FindingKind.MISSING_CATEGORY_MAPPING,
                        severity=Severity.INFO,
                        message=f"{asset.symbol}: {fallback_reason}",
                        field="assetCategory",
                        value=(
                            asset.asset_category.value
                            if asset.asset_category
                            else None
                        ),
                        asset_index=i,
                        suggested_fix="Set an asset category for a sharper estimate",
                    )
                )
            impacts.append(
                self._asset_impact(
                    asset,
                    scenario.id,
                    factor,
                    fallback_reason is not None,
                    risk_profile,
                )
            )
            factors.append(factor)

        dollars = np.array([a.dollar_amount for a in assets], dtype=float)
        if dollars.sum() > 0:
            weights = dollars
        else:
            weights = np.array([a.allocation_percentage for a in assets], dtype=float)

        total_dollar = round(sum(r.impact_dollar for r in impacts), 2)
        if dollars.sum() > 0:
            total_pct = total_dollar / float(dollars.sum()) * 100.0
        else:
            total_pct = float(
                np.average([r.impact_percentage for r in impacts], weights=weights)
            )
        confidence = float(
            np.average([r.confidence_level for r in impacts], weights=weights)
        )

        return ScenarioAnalysisResult(
            portfolio_id=portfolio_id,
            scenario_id=scenario.id,
            scenario_name=scenario.name,
            catalog_version=catalog.version,
            total_impact_percentage=round(total_pct, 4),
            total_impact_dollar=total_dollar,
            confidence_score=round(confidence, 2),
            asset_level_impacts=impacts,
            portfolio_risk_changes=self._risk_changes(
                assets, impacts, factors, risk_profile
            ),
            findings=findings,
        )

    def analyze_all(
        self,
        assets: list[PortfolioAsset],
        risk_profile: RiskProfile | None = None,
        portfolio_id: str | None = None,
    ) -> list[ScenarioAnalysisResult]:
        if risk_profile is None:
            risk_profile = self.scorer.score(assets)
        return [
            self.analyze(assets, s.id, risk_profile, portfolio_id)
            for s in self.catalog.scenarios
        ]

    def _asset_impact(
        self,
        asset: PortfolioAsset,
        scenario_id: ScenarioId,
        factor: ScenarioImpactFactor,
        fallback: bool,
        risk_profile: RiskProfile,
    ) -> AssetImpactResult:
        low, high = factor.impact_range
        midpoint = factor.midpoint
        sector_adj = sector_adjustment(scenario_id, asset.sector)
        quality_adj = quality_adjustment(
            midpoint, asset.risk_rating, factor.asset_category
        )
        raw = midpoint + sector_adj + quality_adj
        impact = min(high, max(low, raw))
        clipped = raw < low or raw > high

        confidence = base_confidence(factor)
        if fallback and factor.asset_category is not None:
            confidence -= FALLBACK_PENALTY
        if clipped:
            confidence -= CLIP_PENALTY
        if not asset.sector:
            confidence -= MISSING_METADATA_PENALTY
        if asset.geographic_region is None:
            confidence -= MISSING_METADATA_PENALTY
        excess_risk = risk_profile.overall_risk_score - RISK_PENALTY_THRESHOLD
        if excess_risk > 0:
            confidence -= excess_risk * RISK_PENALTY_PER_POINT
        confidence = min(100.0, max(0.0, confidence))

        drivers = list(factor.primary_drivers)
        if sector_adj > 0:
            drivers.append(f"Defensive sector tilt ({asset.sector})")
        elif sector_adj < 0:
            drivers.append(f"Sensitive sector tilt ({asset.sector})")

        impact = round(impact, 4)
        return AssetImpactResult(
            symbol=asset.symbol,
            name=asset.name,
            asset_category=factor.asset_category,
            impact_percentage=impact,
            impact_dollar=round(asset.dollar_amount * impact / 100.0, 2),
            confidence_level=round(confidence, 2),
            primary_drivers=drivers,
            base_impact=midpoint,
            sector_adjustment=sector_adj,
            quality_adjustment=quality_adj,
            clipped=clipped,
            category_fallback=fallback,
        )

    def _risk_changes(
        self,
        assets: list[PortfolioAsset],
        impacts: list[AssetImpactResult],
        factors: list[ScenarioImpactFactor],
        baseline: RiskProfile,
    ) -> RiskChangeAnalysis:
        post_values = np.array(
            [
                max(0.0, a.dollar_amount * (1 + r.impact_percentage / 100.0))
                for a, r in zip(assets, impacts)
            ],
            dtype=float,
        )
        if post_values.sum() > 0:
            post_alloc = post_values / post_values.sum() * 100.0
        else:
            post_alloc = np.array([a.allocation_percentage for a in assets], dtype=float)

        post_concentration = hhi_to_concentration(post_alloc / 100.0)

        stressed_risk = np.array(
            [
                min(
                    10.0,
                    (a.risk_rating if a.risk_rating is not None else NEUTRAL_RISK_RATING)
                    * f.volatility_multiplier,
                )
                for a, f in zip(assets, factors)
            ],
            dtype=float,
        )
        post_volatility = min(
            10.0, max(1.0, float(np.average(stressed_risk, weights=post_alloc)))
        )

        post_geographic = self._post_geographic(assets, post_alloc)
        post_overall = blend_overall(
            self.scorer.weights,
            post_concentration,
            post_volatility,
            baseline.credit_risk,
            post_geographic,
        )

        return RiskChangeAnalysis(
            risk_score_change=round(post_overall - baseline.overall_risk_score, 4),
            concentration_risk_change=round(
                post_concentration - baseline.concentration_risk, 4
            ),
            volatility_change=round(post_volatility - baseline.volatility_score, 4),
            correlation_changes=self._correlation_changes(assets, factors),
        )

    def _post_geographic(
        self, assets: list[PortfolioAsset], post_alloc: np.ndarray
    ) -> float:
        by_region: dict[str, float] = {}
        for a, w in zip(assets, post_alloc):
            if a.geographic_region is None:
                continue
            key = a.geographic_region.value
            by_region[key] = by_region.get(key, 0.0) + float(w)
        total = sum(by_region.values())
        if total <= 0:
            return 0.0
        return max(by_region.values()) / total * 100.0

    def _correlation_changes(
        self,
        assets: list[PortfolioAsset],
        factors: list[ScenarioImpactFactor],
    ) -> dict[str, float]:
        # Stable sort keeps input order among equal holdings.
        ranked = sorted(
            range(len(assets)), key=lambda i: -assets[i].dollar_amount
        )[: self.config.correlation_top_n]
        changes: dict[str, float] = {}
        for i, j in combinations(ranked, 2):
            shift = (
                factors[i].correlation_adjustment + factors[j].correlation_adjustment
            ) / 2
            shift = min(1.0, max(-1.0, shift))
            changes[f"{assets[i].symbol}-{assets[j].symbol}"] = round(shift, 4)
        return changes
