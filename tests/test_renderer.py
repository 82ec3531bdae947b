from rich.console import Console

from econlens.analysis.catalog import ScenarioCatalog
from econlens.analysis.risk import ConcentrationRiskScorer
from econlens.analysis.scenario import ScenarioImpactEngine
from econlens.models.common import AssetCategory, AssetType, Region
from econlens.models.portfolio import Portfolio, PortfolioAsset
from econlens.models.validation import FindingKind, Severity, ValidationFinding
from econlens.output.renderer import ReportRenderer


def _make_assets() -> list[PortfolioAsset]:
    return [
        PortfolioAsset(
            symbol="VTI",
            name="Vanguard Total Stock Market ETF",
            asset_type=AssetType.ETF,
            asset_category=AssetCategory.US_LARGE_CAP,
            geographic_region=Region.US,
            allocation_percentage=60.0,
            dollar_amount=60000.0,
        ),
        PortfolioAsset(
            symbol="BND",
            name="Vanguard Total Bond Market ETF",
            asset_type=AssetType.BOND,
            asset_category=AssetCategory.GOVERNMENT_BONDS,
            geographic_region=Region.US,
            allocation_percentage=40.0,
            dollar_amount=40000.0,
        ),
    ]


def _renderer() -> tuple[ReportRenderer, Console]:
    console = Console(record=True, width=200)
    return ReportRenderer(console), console


class TestReportRenderer:
    def test_scenarios(self):
        renderer, console = _renderer()
        renderer.render_scenarios(ScenarioCatalog.default().scenarios)
        text = console.export_text()
        assert "credit-crunch" in text
        assert "Economic Recession" in text

    def test_findings(self):
        renderer, console = _renderer()
        renderer.render_findings(
            [
                ValidationFinding(
                    kind=FindingKind.CONCENTRATION_WARNING,
                    severity=Severity.WARNING,
                    message="Single asset allocation of 85.0% exceeds 80% limit",
                )
            ]
        )
        text = console.export_text()
        assert "WARNING" in text
        assert "CONCENTRATION_WARNING" in text

    def test_no_findings(self):
        renderer, console = _renderer()
        renderer.render_findings([])
        assert "No validation findings" in console.export_text()

    def test_portfolio_and_risk(self):
        assets = _make_assets()
        scorer = ConcentrationRiskScorer()
        portfolio = Portfolio(
            name="Core", total_value=100000.0, assets=assets, risk_profile=scorer.score(assets)
        )
        renderer, console = _renderer()
        renderer.render_portfolio(portfolio)
        renderer.render_risk(portfolio.risk_profile, scorer.diversification(assets))
        text = console.export_text()
        assert "$100,000.00" in text
        assert "Moderate" in text
        assert "Consider international diversification" in text

    def test_analysis(self):
        result = ScenarioImpactEngine(catalog=ScenarioCatalog.default()).analyze(
            _make_assets(), "recession"
        )
        renderer, console = _renderer()
        renderer.render_analysis(result)
        text = console.export_text()
        assert "-25.00%" in text
        assert "VTI-BND" in text
        assert "-11.00%" in text

    def test_comparison_sorted_worst_first(self):
        results = ScenarioImpactEngine(catalog=ScenarioCatalog.default()).analyze_all(
            _make_assets()
        )
        renderer, console = _renderer()
        renderer.render_comparison(results)
        text = console.export_text()
        assert text.index("Market Crash") < text.index("High Inflation")
