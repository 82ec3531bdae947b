from econlens.models.common import AssetCategory, ScenarioId

MAX_SECTOR_ADJUSTMENT = 5.0
MAX_QUALITY_ADJUSTMENT = 5.0
QUALITY_STEP = 1.0  # percentage points per risk-rating point above the norm

SECTOR_ALIASES: dict[str, str] = {
    "information technology": "technology",
    "tech": "technology",
    "health care": "healthcare",
    "financial services": "financials",
    "financial": "financials",
    "consumer staples": "consumer defensive",
    "consumer discretionary": "consumer cyclical",
    "materials": "basic materials",
    "communication": "communication services",
    "telecommunications": "communication services",
    "utility": "utilities",
}

# Percentage-point tilt versus the category average, keyed by GICS-style sector.
SECTOR_SENSITIVITY: dict[ScenarioId, dict[str, float]] = {
    ScenarioId.RECESSION: {
        "consumer defensive": 5.0,
        "utilities": 4.0,
        "healthcare": 4.0,
        "communication services": 0.0,
        "technology": -2.0,
        "real estate": -2.0,
        "industrials": -3.0,
        "energy": -3.0,
        "basic materials": -3.0,
        "financials": -4.0,
        "consumer cyclical": -5.0,
    },
    ScenarioId.HIGH_INFLATION: {
        "energy": 5.0,
        "basic materials": 4.0,
        "financials": 2.0,
        "consumer defensive": 1.0,
        "real estate": 1.0,
        "industrials": 1.0,
        "healthcare": 0.0,
        "utilities": -2.0,
        "communication services": -2.0,
        "consumer cyclical": -3.0,
        "technology": -4.0,
    },
    ScenarioId.RISING_RATES: {
        "financials": 4.0,
        "energy": 1.0,
        "healthcare": 1.0,
        "consumer defensive": 0.0,
        "industrials": 0.0,
        "basic materials": 0.0,
        "communication services": -2.0,
        "consumer cyclical": -2.0,
        "technology": -4.0,
        "utilities": -4.0,
        "real estate": -5.0,
    },
    ScenarioId.MARKET_CRASH: {
        "consumer defensive": 4.0,
        "utilities": 4.0,
        "healthcare": 3.0,
        "communication services": -1.0,
        "energy": -2.0,
        "industrials": -2.0,
        "basic materials": -2.0,
        "technology": -3.0,
        "real estate": -3.0,
        "consumer cyclical": -4.0,
        "financials": -5.0,
    },
    ScenarioId.CREDIT_CRUNCH: {
        "consumer defensive": 4.0,
        "utilities": 3.0,
        "healthcare": 3.0,
        "technology": 0.0,
        "communication services": -1.0,
        "industrials": -2.0,
        "energy": -2.0,
        "basic materials": -2.0,
        "consumer cyclical": -4.0,
        "financials": -5.0,
        "real estate": -5.0,
    },
}


def normalize_sector(sector: str) -> str:
    key = " ".join(sector.strip().lower().split())
    return SECTOR_ALIASES.get(key, key)


def sector_adjustment(scenario_id: ScenarioId, sector: str | None) -> float:
    if not sector:
        return 0.0
    delta = SECTOR_SENSITIVITY.get(scenario_id, {}).get(normalize_sector(sector), 0.0)
    return max(-MAX_SECTOR_ADJUSTMENT, min(MAX_SECTOR_ADJUSTMENT, delta))


def quality_adjustment(
    midpoint: float,
    risk_rating: float | None,
    category: AssetCategory | None,
) -> float:
    """Tilt toward the midpoint's direction for riskier-than-normal holdings.

    A holding rated above its category norm moves further in the direction
    the scenario already pushes the category; a safer holding is damped.
    """
    if risk_rating is None or category is None or midpoint == 0:
        return 0.0
    raw = (risk_rating - category.norm_risk) * QUALITY_STEP
    bounded = max(-MAX_QUALITY_ADJUSTMENT, min(MAX_QUALITY_ADJUSTMENT, raw))
    return bounded if midpoint > 0 else -bounded
