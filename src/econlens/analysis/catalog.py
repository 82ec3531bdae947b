"""Scenario impact catalog.

The catalog is a read-only table keyed by (scenario, asset category). A
process holds one active catalog; replacing it swaps the whole reference so
readers never observe a partially updated table.
"""

import logging
import threading
from types import MappingProxyType
from typing import Mapping

from econlens.analysis.catalog_data import CATALOG_VERSION, IMPACT_TABLE, SCENARIOS
from econlens.models.common import AssetCategory, AssetType, Region, ScenarioId
from econlens.models.portfolio import PortfolioAsset
from econlens.models.scenario import ScenarioDefinition, ScenarioImpactFactor

logger = logging.getLogger(__name__)

NEUTRAL_DRIVERS = ("No scenario mapping for this asset",)


class UnknownScenarioError(LookupError):
    def __init__(self, scenario_id: str) -> None:
        self.scenario_id = scenario_id
        super().__init__(f"Unknown scenario: {scenario_id}")


def broad_category(
    asset_type: AssetType, region: Region | None = None
) -> AssetCategory:
    if asset_type.is_equity_like:
        if region == Region.EMERGING_MARKETS:
            return AssetCategory.EMERGING_MARKETS
        if region == Region.DEVELOPED_INTERNATIONAL:
            return AssetCategory.INTERNATIONAL_DEVELOPED
        return AssetCategory.US_LARGE_CAP
    return {
        AssetType.BOND: AssetCategory.CORPORATE_BONDS,
        AssetType.REIT: AssetCategory.REAL_ESTATE,
        AssetType.COMMODITY: AssetCategory.COMMODITIES,
        AssetType.CASH: AssetCategory.CASH_EQUIVALENTS,
    }[asset_type]


class ScenarioCatalog:
    def __init__(
        self,
        scenarios: Mapping[ScenarioId, ScenarioDefinition],
        factors: Mapping[tuple[ScenarioId, AssetCategory], ScenarioImpactFactor],
        version: str = CATALOG_VERSION,
    ) -> None:
        self.version = version
        self._scenarios = MappingProxyType(dict(scenarios))
        self._factors = MappingProxyType(dict(factors))

    @classmethod
    def default(cls) -> "ScenarioCatalog":
        scenarios = {
            sid: ScenarioDefinition(id=sid, **meta) for sid, meta in SCENARIOS.items()
        }
        factors: dict[tuple[ScenarioId, AssetCategory], ScenarioImpactFactor] = {}
        for sid, rows in IMPACT_TABLE.items():
            for category, (low, high, drivers, vol_mult, corr_adj) in rows.items():
                factors[(sid, category)] = ScenarioImpactFactor(
                    scenario=sid,
                    asset_category=category,
                    impact_range=(float(low), float(high)),
                    primary_drivers=drivers,
                    volatility_multiplier=vol_mult,
                    correlation_adjustment=corr_adj,
                )
        return cls(scenarios, factors)

    @property
    def scenarios(self) -> list[ScenarioDefinition]:
        return list(self._scenarios.values())

    def __len__(self) -> int:
        return len(self._factors)

    def scenario(self, scenario_id: str | ScenarioId) -> ScenarioDefinition:
        sid = ScenarioId.parse(str(scenario_id))
        if sid is None or sid not in self._scenarios:
            raise UnknownScenarioError(str(scenario_id))
        return self._scenarios[sid]

    def lookup(
        self, scenario_id: ScenarioId, category: AssetCategory
    ) -> ScenarioImpactFactor | None:
        return self._factors.get((scenario_id, category))

    def missing_entries(self) -> list[tuple[ScenarioId, AssetCategory]]:
        return [
            (sid, cat)
            for sid in self._scenarios
            for cat in AssetCategory
            if (sid, cat) not in self._factors
        ]

    def resolve(
        self, scenario_id: ScenarioId, asset: PortfolioAsset
    ) -> tuple[ScenarioImpactFactor, str | None]:
        """Find the factor row for an asset.

        Returns the row and, when a fallback was used, a short reason.
        """
        if asset.asset_category is not None:
            factor = self.lookup(scenario_id, asset.asset_category)
            if factor is not None:
                return factor, None
            reason = f"no catalog entry for category {asset.asset_category.value}"
        else:
            reason = "asset category not provided"

        broad = broad_category(asset.asset_type, asset.geographic_region)
        factor = self.lookup(scenario_id, broad)
        if factor is not None and broad != asset.asset_category:
            logger.warning(
                "%s: %s, using %s for %s",
                asset.symbol,
                reason,
                broad.value,
                scenario_id.value,
            )
            return factor, f"{reason}; using {broad.value}"

        logger.warning(
            "%s: %s, using neutral zero-impact entry for %s",
            asset.symbol,
            reason,
            scenario_id.value,
        )
        neutral = ScenarioImpactFactor(
            scenario=scenario_id,
            asset_category=None,
            impact_range=(0.0, 0.0),
            primary_drivers=NEUTRAL_DRIVERS,
        )
        return neutral, f"{reason}; using neutral zero-impact entry"


_lock = threading.Lock()
_active: ScenarioCatalog = ScenarioCatalog.default()


def get_catalog() -> ScenarioCatalog:
    return _active


def swap_catalog(catalog: ScenarioCatalog) -> ScenarioCatalog:
    """Install a new active catalog and return the one it replaced."""
    global _active
    with _lock:
        previous = _active
        _active = catalog
    logger.info("Scenario catalog swapped: %s -> %s", previous.version, catalog.version)
    return previous
