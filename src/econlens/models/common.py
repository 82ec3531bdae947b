from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every record that crosses the API boundary.

    Fields are snake_case in Python and camelCase on the wire; input is
    accepted in either form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetType(StrEnum):
    STOCK = "stock"
    ETF = "etf"
    MUTUAL_FUND = "mutual_fund"
    BOND = "bond"
    REIT = "reit"
    COMMODITY = "commodity"
    CASH = "cash"

    @property
    def is_equity_like(self) -> bool:
        return self in (AssetType.STOCK, AssetType.ETF, AssetType.MUTUAL_FUND)


class AssetCategory(StrEnum):
    US_LARGE_CAP = "us_large_cap"
    US_MID_CAP = "us_mid_cap"
    US_SMALL_CAP = "us_small_cap"
    INTERNATIONAL_DEVELOPED = "international_developed"
    EMERGING_MARKETS = "emerging_markets"

    GOVERNMENT_BONDS = "government_bonds"
    CORPORATE_BONDS = "corporate_bonds"
    HIGH_YIELD_BONDS = "high_yield_bonds"
    INTERNATIONAL_BONDS = "international_bonds"
    INFLATION_PROTECTED = "inflation_protected"

    REAL_ESTATE = "real_estate"
    COMMODITIES = "commodities"
    CASH_EQUIVALENTS = "cash_equivalents"

    @property
    def label(self) -> str:
        return CATEGORY_METADATA[self][0]

    @property
    def norm_risk(self) -> float:
        return CATEGORY_METADATA[self][1]


# name, typical risk level (1-10)
CATEGORY_METADATA: dict[AssetCategory, tuple[str, float]] = {
    AssetCategory.US_LARGE_CAP: ("US Large Cap", 6.0),
    AssetCategory.US_MID_CAP: ("US Mid Cap", 7.0),
    AssetCategory.US_SMALL_CAP: ("US Small Cap", 8.0),
    AssetCategory.INTERNATIONAL_DEVELOPED: ("International Developed", 7.0),
    AssetCategory.EMERGING_MARKETS: ("Emerging Markets", 9.0),
    AssetCategory.GOVERNMENT_BONDS: ("Government Bonds", 2.0),
    AssetCategory.CORPORATE_BONDS: ("Corporate Bonds", 3.0),
    AssetCategory.HIGH_YIELD_BONDS: ("High Yield Bonds", 6.0),
    AssetCategory.INTERNATIONAL_BONDS: ("International Bonds", 4.0),
    AssetCategory.INFLATION_PROTECTED: ("Inflation Protected", 2.0),
    AssetCategory.REAL_ESTATE: ("Real Estate", 6.0),
    AssetCategory.COMMODITIES: ("Commodities", 7.0),
    AssetCategory.CASH_EQUIVALENTS: ("Cash Equivalents", 1.0),
}


class Region(StrEnum):
    US = "us"
    DEVELOPED_INTERNATIONAL = "developed_international"
    EMERGING_MARKETS = "emerging_markets"
    GLOBAL = "global"


class ScenarioId(StrEnum):
    RECESSION = "recession"
    HIGH_INFLATION = "high-inflation"
    RISING_RATES = "rising-rates"
    MARKET_CRASH = "market-crash"
    CREDIT_CRUNCH = "credit-crunch"

    @staticmethod
    def parse(value: str) -> "ScenarioId | None":
        key = value.strip().lower()
        key = LEGACY_SCENARIO_IDS.get(key, key)
        try:
            return ScenarioId(key)
        except ValueError:
            return None


LEGACY_SCENARIO_IDS: dict[str, str] = {
    "inflation": "high-inflation",
    "interest-rates": "rising-rates",
}
