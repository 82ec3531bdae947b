import numpy as np
import pytest

from econlens.analysis.risk import (
    ConcentrationRiskScorer,
    blend_overall,
    credit_weight,
    hhi_to_concentration,
    rating_to_credit_weight,
)
from econlens.config import DEFAULT_RISK_WEIGHTS
from econlens.models.common import AssetCategory, AssetType, Region
from econlens.models.portfolio import PortfolioAsset


def make_asset(**overrides) -> PortfolioAsset:
    defaults = {
        "symbol": "VTI",
        "name": "Vanguard Total Stock Market ETF",
        "asset_type": AssetType.ETF,
        "asset_category": AssetCategory.US_LARGE_CAP,
        "geographic_region": Region.US,
        "allocation_percentage": 60.0,
        "dollar_amount": 60000.0,
    }
    defaults.update(overrides)
    return PortfolioAsset(**defaults)


def balanced() -> list[PortfolioAsset]:
    return [
        make_asset(),
        make_asset(
            symbol="BND",
            name="Vanguard Total Bond Market ETF",
            asset_type=AssetType.BOND,
            asset_category=AssetCategory.GOVERNMENT_BONDS,
            allocation_percentage=40.0,
            dollar_amount=40000.0,
        ),
    ]


class TestCreditWeights:
    @pytest.mark.parametrize(
        "rating,expected",
        [
            ("AAA", 1.0),
            ("AA+", 1.0),
            ("AA-", 2.0),
            ("A+", 2.0),
            ("A-", 3.0),
            ("BBB+", 3.0),
            ("BBB-", 4.0),
            ("BB+", 6.0),
            ("B", 8.0),
            ("ccc", 10.0),
            ("NR", 10.0),
        ],
    )
    def test_rating_ladder(self, rating, expected):
        assert rating_to_credit_weight(rating) == expected

    def test_bond_rating_beats_category(self):
        bond = make_asset(
            asset_type=AssetType.BOND,
            asset_category=AssetCategory.CORPORATE_BONDS,
            credit_rating="BB",
        )
        assert credit_weight(bond) == 6.0

    def test_category_then_type(self):
        assert credit_weight(make_asset()) == 3.0
        reit = make_asset(asset_type=AssetType.REIT, asset_category=None)
        assert credit_weight(reit) == 5.0


class TestHelpers:
    def test_single_holding_is_max_concentration(self):
        assert hhi_to_concentration(np.array([1.0])) == 10.0

    def test_equal_weights_floor(self):
        assert hhi_to_concentration(np.full(20, 0.05)) == 1.0

    def test_blend_uses_weights(self):
        score = blend_overall(DEFAULT_RISK_WEIGHTS, 5.2, 5.0, 2.2, 100.0)
        assert score == pytest.approx(5.01)

    def test_blend_geographic_floor(self):
        low = blend_overall(DEFAULT_RISK_WEIGHTS, 1.0, 1.0, 1.0, 0.0)
        assert low == pytest.approx(1.0)


class TestConcentrationRiskScorer:
    def test_balanced_profile(self):
        profile = ConcentrationRiskScorer().score(balanced())
        assert profile.concentration_risk == pytest.approx(5.2)
        assert profile.volatility_score == pytest.approx(5.0)
        assert profile.credit_risk == pytest.approx(2.2)
        assert profile.geographic_risk == pytest.approx(100.0)
        assert profile.sector_concentration == 0.0
        assert profile.overall_risk_score == pytest.approx(5.01)

    def test_scores_stay_in_range(self):
        assets = [
            make_asset(
                symbol="EEM",
                asset_category=AssetCategory.EMERGING_MARKETS,
                geographic_region=Region.EMERGING_MARKETS,
                allocation_percentage=100.0,
                dollar_amount=1.0,
                risk_rating=10,
            )
        ]
        profile = ConcentrationRiskScorer().score(assets)
        for value in (
            profile.overall_risk_score,
            profile.concentration_risk,
            profile.volatility_score,
            profile.credit_risk,
        ):
            assert 1.0 <= value <= 10.0
        assert profile.concentration_risk == 10.0

    def test_sector_share_uses_raw_allocation(self):
        assets = balanced()
        assets[0] = make_asset(sector="Technology")
        profile = ConcentrationRiskScorer().score(assets)
        assert profile.sector_concentration == pytest.approx(60.0)

    def test_sector_grouping_case_insensitive(self):
        assets = [
            make_asset(sector="Technology", allocation_percentage=50.0),
            make_asset(symbol="QQQ", sector="technology", allocation_percentage=50.0),
        ]
        profile = ConcentrationRiskScorer().score(assets)
        assert profile.sector_concentration == pytest.approx(100.0)

    def test_geographic_normalized_by_tagged_total(self):
        assets = [
            make_asset(allocation_percentage=30.0),
            make_asset(
                symbol="VEA",
                geographic_region=Region.DEVELOPED_INTERNATIONAL,
                allocation_percentage=10.0,
            ),
            make_asset(symbol="GLD", geographic_region=None, allocation_percentage=60.0),
        ]
        profile = ConcentrationRiskScorer().score(assets)
        assert profile.geographic_risk == pytest.approx(75.0)

    def test_volatility_weighted_by_allocation(self):
        assets = balanced()
        assets[0] = make_asset(risk_rating=8)
        assets[1] = assets[1].model_copy(update={"risk_rating": 3})
        profile = ConcentrationRiskScorer().score(assets)
        assert profile.volatility_score == pytest.approx(6.0)

    def test_custom_weights(self):
        scorer = ConcentrationRiskScorer(
            {"concentration": 1.0, "volatility": 0.0, "credit": 0.0, "geographic": 0.0}
        )
        profile = scorer.score(balanced())
        assert profile.overall_risk_score == pytest.approx(5.2)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            ConcentrationRiskScorer().score([])

    def test_deterministic(self):
        scorer = ConcentrationRiskScorer()
        assert scorer.score(balanced()) == scorer.score(balanced())


class TestDiversification:
    def test_two_asset_portfolio(self):
        d = ConcentrationRiskScorer().diversification(balanced())
        assert d.asset_type_diversification == 4.0
        assert d.sector_diversification == 0.0
        assert d.geographic_diversification == 2.5
        assert len(d.recommendations) == 3

    def test_caps_at_ten(self):
        assets = [
            make_asset(symbol=f"S{i}", sector=f"Sector {i}", allocation_percentage=10.0)
            for i in range(10)
        ]
        d = ConcentrationRiskScorer().diversification(assets)
        assert d.sector_diversification == 10.0
        assert "Add exposure to different sectors" not in d.recommendations


class TestConcentrationMonotonic:
    def _concentration(self, allocations: list[float]) -> float:
        assets = [
            make_asset(symbol=f"A{i}", allocation_percentage=a, dollar_amount=a)
            for i, a in enumerate(allocations)
        ]
        return ConcentrationRiskScorer().score(assets).concentration_risk

    def test_less_uniform_is_riskier(self):
        even = self._concentration([50.0, 50.0])
        skewed = self._concentration([90.0, 10.0])
        single = self._concentration([100.0])
        assert even < skewed < single
        assert single == 10.0
