from econlens.models.common import AssetCategory as C
from econlens.models.common import ScenarioId as S

CATALOG_VERSION = "2024.1"

SCENARIOS: dict[S, dict] = {
    S.RECESSION: {
        "name": "Economic Recession",
        "description": (
            "Period of economic decline with falling GDP and rising unemployment"
        ),
        "duration": "12-24 months",
        "frequency": "Every 7-10 years",
        "historical_context": (
            "2001 dot-com recession",
            "2008 Global Financial Crisis",
            "2020 COVID recession",
        ),
    },
    S.HIGH_INFLATION: {
        "name": "High Inflation",
        "description": "Rapid increase in general price levels",
        "duration": "6-18 months",
        "frequency": "Occasional periods",
        "historical_context": (
            "1970s stagflation",
            "2021-2022 post-pandemic inflation",
        ),
    },
    S.RISING_RATES: {
        "name": "Rising Interest Rates",
        "description": "Federal Reserve increasing benchmark rates",
        "duration": "12-36 months",
        "frequency": "Cyclical",
        "historical_context": (
            "1994 bond market selloff",
            "2022 Federal Reserve tightening cycle",
        ),
    },
    S.MARKET_CRASH: {
        "name": "Market Crash",
        "description": "Sharp, sudden decline in stock prices",
        "duration": "3-12 months",
        "frequency": "Every 10-15 years",
        "historical_context": (
            "1987 Black Monday",
            "2008 Lehman collapse",
            "March 2020 COVID crash",
        ),
    },
    S.CREDIT_CRUNCH: {
        "name": "Credit Crunch",
        "description": "Reduction in availability of credit",
        "duration": "6-24 months",
        "frequency": "Occasional",
        "historical_context": (
            "2007-2008 credit crisis",
            "2023 regional bank stress",
        ),
    },
}

# (min %, max %, drivers, volatility multiplier, correlation adjustment)
IMPACT_TABLE: dict[S, dict[C, tuple]] = {
    S.RECESSION: {
        C.US_LARGE_CAP: (-35, -15, ("Earnings decline", "P/E compression", "Risk aversion"), 1.5, 0.20),
        C.US_MID_CAP: (-40, -18, ("Earnings decline", "Credit tightening", "Risk aversion"), 1.6, 0.20),
        C.US_SMALL_CAP: (-45, -20, ("Earnings decline", "Financing stress", "Risk aversion"), 1.8, 0.25),
        C.INTERNATIONAL_DEVELOPED: (-38, -16, ("Currency effects", "International recession", "Trade tensions"), 1.6, 0.25),
        C.EMERGING_MARKETS: (-45, -20, ("Capital flight", "Commodity demand drop", "Currency weakness"), 1.9, 0.30),
        C.GOVERNMENT_BONDS: (5, 15, ("Flight to safety", "Lower interest rates", "Fed policy"), 0.8, -0.30),
        C.CORPORATE_BONDS: (-2, 6, ("Lower interest rates", "Spread widening", "Default concerns"), 1.2, 0.00),
        C.HIGH_YIELD_BONDS: (-20, -5, ("Default risk", "Spread widening", "Liquidity stress"), 1.7, 0.30),
        C.INTERNATIONAL_BONDS: (0, 8, ("Global rate cuts", "Safe-haven demand", "Currency effects"), 1.0, -0.10),
        C.INFLATION_PROTECTED: (0, 8, ("Falling real yields", "Flight to safety", "Disinflation"), 0.9, -0.20),
        C.REAL_ESTATE: (-30, -10, ("Occupancy decline", "Credit tightening", "Lower rents"), 1.5, 0.20),
        C.COMMODITIES: (-30, -10, ("Demand collapse", "Industrial slowdown", "Stronger dollar"), 1.4, 0.10),
        C.CASH_EQUIVALENTS: (0, 2, ("Capital preservation", "Falling short rates"), 0.1, 0.00),
    },
    S.HIGH_INFLATION: {
        C.US_LARGE_CAP: (-15, 5, ("Margin compression", "Higher discount rates", "Pricing power"), 1.3, 0.10),
        C.US_MID_CAP: (-18, 4, ("Margin compression", "Input cost pressure", "Higher discount rates"), 1.4, 0.10),
        C.US_SMALL_CAP: (-22, 3, ("Input cost pressure", "Financing costs", "Weak pricing power"), 1.5, 0.15),
        C.INTERNATIONAL_DEVELOPED: (-15, 5, ("Currency effects", "Global price pressures", "Energy costs"), 1.3, 0.10),
        C.EMERGING_MARKETS: (-20, 10, ("Commodity exporters", "Currency volatility", "Capital outflows"), 1.6, 0.10),
        C.GOVERNMENT_BONDS: (-15, -3, ("Rising yields", "Real return erosion", "Fed tightening"), 1.4, 0.20),
        C.CORPORATE_BONDS: (-15, -4, ("Rising yields", "Real return erosion", "Spread widening"), 1.3, 0.20),
        C.HIGH_YIELD_BONDS: (-12, 0, ("Rising yields", "Refinancing risk", "Nominal growth support"), 1.4, 0.20),
        C.INTERNATIONAL_BONDS: (-12, -2, ("Global yields rise", "Currency effects", "Real return erosion"), 1.3, 0.10),
        C.INFLATION_PROTECTED: (2, 10, ("Inflation indexation", "Real yield changes"), 0.9, -0.20),
        C.REAL_ESTATE: (-5, 10, ("Rent escalation", "Replacement cost growth", "Higher cap rates"), 1.2, 0.00),
        C.COMMODITIES: (10, 30, ("Real asset demand", "Supply constraints", "Inflation hedge"), 1.5, -0.30),
        C.CASH_EQUIVALENTS: (0, 3, ("Higher short rates", "Purchasing power erosion"), 0.1, 0.00),
    },
    S.RISING_RATES: {
        C.US_LARGE_CAP: (-15, 0, ("Higher discount rates", "Valuation compression", "Borrowing costs"), 1.2, 0.10),
        C.US_MID_CAP: (-18, -1, ("Higher discount rates", "Borrowing costs", "Valuation compression"), 1.3, 0.10),
        C.US_SMALL_CAP: (-22, -2, ("Floating-rate debt burden", "Borrowing costs", "Valuation compression"), 1.4, 0.15),
        C.INTERNATIONAL_DEVELOPED: (-15, 0, ("Dollar strength", "Higher discount rates", "Capital flows"), 1.2, 0.10),
        C.EMERGING_MARKETS: (-25, -5, ("Dollar strength", "Capital outflows", "Debt servicing costs"), 1.5, 0.15),
        C.GOVERNMENT_BONDS: (-12, -2, ("Duration losses", "Higher yields", "Fed policy"), 1.2, 0.20),
        C.CORPORATE_BONDS: (-14, -3, ("Duration losses", "Higher yields", "Spread pressure"), 1.2, 0.20),
        C.HIGH_YIELD_BONDS: (-10, 0, ("Refinancing risk", "Shorter duration buffer", "Spread pressure"), 1.3, 0.15),
        C.INTERNATIONAL_BONDS: (-12, -2, ("Global yields rise", "Dollar strength", "Duration losses"), 1.2, 0.10),
        C.INFLATION_PROTECTED: (-8, 0, ("Real yield increase", "Duration losses"), 1.1, 0.10),
        C.REAL_ESTATE: (-20, -5, ("Higher cap rates", "Mortgage costs", "Financing pressure"), 1.4, 0.20),
        C.COMMODITIES: (-10, 5, ("Dollar strength", "Growth slowdown", "Carry costs"), 1.2, 0.00),
        C.CASH_EQUIVALENTS: (1, 4, ("Higher short rates", "Reinvestment yield"), 0.1, 0.00),
    },
    S.MARKET_CRASH: {
        C.US_LARGE_CAP: (-45, -25, ("Panic selling", "Liquidity crunch", "Margin calls"), 2.0, 0.35),
        C.US_MID_CAP: (-50, -28, ("Panic selling", "Liquidity crunch", "Margin calls"), 2.1, 0.35),
        C.US_SMALL_CAP: (-55, -30, ("Panic selling", "Liquidity crunch", "Forced deleveraging"), 2.3, 0.35),
        C.INTERNATIONAL_DEVELOPED: (-48, -25, ("Global contagion", "Panic selling", "Currency effects"), 2.0, 0.35),
        C.EMERGING_MARKETS: (-55, -30, ("Global contagion", "Capital flight", "Currency collapse"), 2.4, 0.40),
        C.GOVERNMENT_BONDS: (3, 12, ("Flight to safety", "Emergency rate cuts", "Fed policy"), 1.0, -0.35),
        C.CORPORATE_BONDS: (-8, 3, ("Spread widening", "Liquidity stress", "Flight to quality"), 1.5, 0.10),
        C.HIGH_YIELD_BONDS: (-30, -10, ("Default fears", "Forced selling", "Liquidity stress"), 2.0, 0.35),
        C.INTERNATIONAL_BONDS: (-3, 6, ("Safe-haven flows", "Currency swings"), 1.2, -0.10),
        C.INFLATION_PROTECTED: (-2, 6, ("Flight to safety", "Deflation fears"), 1.0, -0.20),
        C.REAL_ESTATE: (-40, -20, ("Forced selling", "Credit freeze", "Valuation reset"), 1.8, 0.30),
        C.COMMODITIES: (-35, -10, ("Demand shock", "Deleveraging", "Stronger dollar"), 1.7, 0.20),
        C.CASH_EQUIVALENTS: (0, 1, ("Capital preservation",), 0.1, 0.00),
    },
    S.CREDIT_CRUNCH: {
        C.US_LARGE_CAP: (-30, -10, ("Credit availability", "Earnings downgrades", "Risk aversion"), 1.5, 0.20),
        C.US_MID_CAP: (-35, -12, ("Credit availability", "Bank lending dependency", "Risk aversion"), 1.6, 0.20),
        C.US_SMALL_CAP: (-42, -18, ("Bank lending dependency", "Refinancing freeze", "Risk aversion"), 1.8, 0.25),
        C.INTERNATIONAL_DEVELOPED: (-32, -12, ("Bank contagion", "Credit availability", "Currency effects"), 1.6, 0.25),
        C.EMERGING_MARKETS: (-40, -15, ("Funding stress", "Dollar shortage", "Capital flight"), 1.9, 0.30),
        C.GOVERNMENT_BONDS: (3, 12, ("Flight to safety", "Central bank easing"), 0.9, -0.30),
        C.CORPORATE_BONDS: (-10, 0, ("Spread widening", "Downgrade risk", "Liquidity stress"), 1.5, 0.20),
        C.HIGH_YIELD_BONDS: (-28, -8, ("Default wave", "Refinancing freeze", "Liquidity stress"), 2.0, 0.35),
        C.INTERNATIONAL_BONDS: (-4, 5, ("Mixed sovereign stress", "Currency effects"), 1.2, 0.00),
        C.INFLATION_PROTECTED: (0, 7, ("Flight to safety", "Falling real yields"), 0.9, -0.20),
        C.REAL_ESTATE: (-35, -12, ("Mortgage availability", "Refinancing risk", "Falling valuations"), 1.7, 0.30),
        C.COMMODITIES: (-25, -5, ("Trade finance squeeze", "Demand slowdown"), 1.4, 0.10),
        C.CASH_EQUIVALENTS: (0, 2, ("Liquidity premium", "Capital preservation"), 0.1, 0.00),
    },
}
