from econlens.analysis.validator import AllocationValidator
from econlens.config import EngineConfig
from econlens.models.portfolio import CandidateAsset, PortfolioSubmission
from econlens.models.validation import FindingKind, Severity, has_blocking


def make_asset(**overrides) -> CandidateAsset:
    defaults = {
        "symbol": "VTI",
        "name": "Vanguard Total Stock Market ETF",
        "asset_type": "etf",
        "asset_category": "us_large_cap",
        "geographic_region": "us",
        "allocation_percentage": 60.0,
        "dollar_amount": 60000.0,
    }
    defaults.update(overrides)
    return CandidateAsset(**defaults)


def balanced() -> list[CandidateAsset]:
    return [
        make_asset(),
        make_asset(
            symbol="BND",
            name="Vanguard Total Bond Market ETF",
            asset_type="bond",
            asset_category="government_bonds",
            allocation_percentage=40.0,
            dollar_amount=40000.0,
        ),
    ]


def kinds(findings) -> list[FindingKind]:
    return [f.kind for f in findings]


class TestAllocationValidator:
    def test_valid_portfolio_has_no_findings(self):
        assert AllocationValidator().validate(balanced(), 100000.0) == []

    def test_allocation_sum_off(self):
        assets = balanced()
        assets[1] = make_asset(
            symbol="BND",
            asset_type="bond",
            allocation_percentage=39.0,
            dollar_amount=40000.0,
        )
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.INVALID_ALLOCATION_SUM]
        assert findings[0].message == (
            "Portfolio allocation sums to 99.00%, expected 100%"
        )
        assert findings[0].is_blocking

    def test_allocation_within_tolerance(self):
        assets = balanced()
        assets[1] = make_asset(
            symbol="BND",
            asset_type="bond",
            allocation_percentage=40.005,
            dollar_amount=40000.0,
        )
        assert AllocationValidator().validate(assets, 100000.0) == []

    def test_dollar_mismatch(self):
        findings = AllocationValidator().validate(balanced(), 100500.0)
        assert kinds(findings) == [FindingKind.INVALID_DOLLAR_CONSISTENCY]

    def test_single_asset_concentration_is_warning(self):
        assets = [
            make_asset(allocation_percentage=85.0, dollar_amount=85.0),
            make_asset(
                symbol="BND",
                asset_type="bond",
                allocation_percentage=15.0,
                dollar_amount=15.0,
            ),
        ]
        findings = AllocationValidator().validate(assets, 100.0)
        assert kinds(findings) == [FindingKind.CONCENTRATION_WARNING]
        assert findings[0].severity == Severity.WARNING
        assert findings[0].asset_index == 0
        assert not has_blocking(findings)

    def test_cash_concentration_warning(self):
        assets = [
            make_asset(
                symbol="CASH",
                asset_type="cash",
                asset_category="cash_equivalents",
                allocation_percentage=60.0,
                dollar_amount=60.0,
            ),
            make_asset(allocation_percentage=40.0, dollar_amount=40.0),
        ]
        findings = AllocationValidator().validate(assets, 100.0)
        assert kinds(findings) == [FindingKind.CONCENTRATION_WARNING]
        assert "Cash allocation" in findings[0].message

    def test_custom_concentration_threshold(self):
        config = EngineConfig(max_single_allocation=50.0)
        findings = AllocationValidator(config).validate(balanced(), 100000.0)
        assert kinds(findings) == [FindingKind.CONCENTRATION_WARNING]

    def test_missing_fields_skip_sum_checks(self):
        assets = [CandidateAsset(symbol="QQQ"), *balanced()]
        findings = AllocationValidator().validate(assets, 1.0)
        assert kinds(findings) == [FindingKind.MISSING_REQUIRED_FIELD]
        assert findings[0].asset_index == 0
        assert "name" in findings[0].message

    def test_blank_string_counts_as_missing(self):
        assets = balanced()
        assets[0] = make_asset(name="   ")
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.MISSING_REQUIRED_FIELD]
        assert findings[0].field == "name"

    def test_duplicate_symbol_case_insensitive(self):
        assets = [
            make_asset(allocation_percentage=50.0, dollar_amount=50.0),
            make_asset(symbol="vti", allocation_percentage=50.0, dollar_amount=50.0),
        ]
        findings = AllocationValidator().validate(assets, 100.0)
        assert kinds(findings) == [FindingKind.DUPLICATE_SYMBOL]
        assert findings[0].asset_index == 1
        assert findings[0].related_index == 0

    def test_invalid_symbol(self):
        assets = balanced()
        assets[0] = make_asset(symbol="BRK.B")
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.INVALID_SYMBOL_FORMAT]

    def test_symbol_trailing_newline(self):
        assets = balanced()
        assets[0] = make_asset(symbol="VTI\n")
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.INVALID_SYMBOL_FORMAT]

    def test_symbol_too_long(self):
        assets = balanced()
        assets[0] = make_asset(symbol="A" * 21)
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.INVALID_SYMBOL_FORMAT]

    def test_unsupported_asset_type(self):
        assets = balanced()
        assets[0] = make_asset(asset_type="crypto")
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.UNSUPPORTED_ASSET_TYPE]
        assert findings[0].value == "crypto"

    def test_unsupported_region(self):
        assets = balanced()
        assets[0] = make_asset(geographic_region="mars")
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.UNSUPPORTED_ASSET_TYPE]
        assert findings[0].field == "geographicRegion"

    def test_empty_portfolio(self):
        findings = AllocationValidator().validate([], 0.0)
        assert kinds(findings) == [FindingKind.CARDINALITY_VIOLATION]

    def test_too_many_assets(self):
        assets = [
            make_asset(
                symbol=f"A{i}", allocation_percentage=100 / 51, dollar_amount=1.0
            )
            for i in range(51)
        ]
        findings = AllocationValidator().validate(assets, 51.0)
        assert FindingKind.CARDINALITY_VIOLATION in kinds(findings)

    def test_zero_allocation_out_of_range(self):
        assets = balanced()
        assets.append(make_asset(symbol="GLD", allocation_percentage=0.0, dollar_amount=0.0))
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.OUT_OF_RANGE_FIELD]
        assert findings[0].asset_index == 2

    def test_negative_dollar_amount(self):
        assets = balanced()
        assets[0] = make_asset(dollar_amount=-1.0)
        findings = AllocationValidator().validate(assets, 39999.0)
        assert kinds(findings) == [FindingKind.OUT_OF_RANGE_FIELD]

    def test_risk_rating_bounds(self):
        assets = balanced()
        assets[0] = make_asset(risk_rating=11)
        findings = AllocationValidator().validate(assets, 100000.0)
        assert kinds(findings) == [FindingKind.OUT_OF_RANGE_FIELD]
        assert findings[0].field == "riskRating"

    def test_validation_is_pure(self):
        validator = AllocationValidator()
        assets = balanced()
        first = validator.validate(assets, 100500.0)
        second = validator.validate(assets, 100500.0)
        assert first == second


class TestSubmission:
    def test_name_required(self):
        sub = PortfolioSubmission(name=" ", total_value=100000.0, assets=balanced())
        findings = AllocationValidator().validate_submission(sub)
        assert kinds(findings) == [FindingKind.OUT_OF_RANGE_FIELD]
        assert findings[0].field == "name"

    def test_description_too_long(self):
        sub = PortfolioSubmission(
            name="Core",
            description="x" * 1001,
            total_value=100000.0,
            assets=balanced(),
        )
        findings = AllocationValidator().validate_submission(sub)
        assert kinds(findings) == [FindingKind.OUT_OF_RANGE_FIELD]
        assert findings[0].field == "description"

    def test_accept_builds_portfolio(self):
        sub = PortfolioSubmission(
            id="p1", name="Core", total_value=100000.0, assets=balanced()
        )
        portfolio, findings = AllocationValidator().accept(sub)
        assert findings == []
        assert portfolio is not None
        assert portfolio.id == "p1"
        assert [a.symbol for a in portfolio.assets] == ["VTI", "BND"]
        assert portfolio.risk_profile is not None
        assert abs(portfolio.risk_profile.overall_risk_score - 5.01) < 1e-9

    def test_accept_keeps_warnings(self):
        assets = [
            make_asset(allocation_percentage=90.0, dollar_amount=90.0),
            make_asset(symbol="BND", asset_type="bond", allocation_percentage=10.0, dollar_amount=10.0),
        ]
        sub = PortfolioSubmission(name="Heavy", total_value=100.0, assets=assets)
        portfolio, findings = AllocationValidator().accept(sub)
        assert portfolio is not None
        assert kinds(findings) == [FindingKind.CONCENTRATION_WARNING]

    def test_accept_rejects_blocking(self):
        sub = PortfolioSubmission(name="Core", total_value=1.0, assets=balanced())
        portfolio, findings = AllocationValidator().accept(sub)
        assert portfolio is None
        assert has_blocking(findings)

    def test_accept_treats_blank_optionals_as_missing(self):
        assets = [
            make_asset(
                asset_category="",
                geographic_region="  ",
                sector="",
                allocation_percentage=100.0,
                dollar_amount=100.0,
            )
        ]
        sub = PortfolioSubmission(name="Core", total_value=100.0, assets=assets)
        portfolio, findings = AllocationValidator().accept(sub)
        assert portfolio is not None
        asset = portfolio.assets[0]
        assert asset.asset_category is None
        assert asset.geographic_region is None
        assert asset.sector is None
        assert FindingKind.UNSUPPORTED_ASSET_TYPE not in kinds(findings)

    def test_blank_required_field_from_json(self):
        sub = PortfolioSubmission.model_validate(
            {
                "name": "Core",
                "totalValue": 100.0,
                "assets": [
                    {
                        "symbol": "VTI",
                        "name": "",
                        "assetType": "etf",
                        "allocationPercentage": 100,
                        "dollarAmount": 100,
                    }
                ],
            }
        )
        portfolio, findings = AllocationValidator().accept(sub)
        assert portfolio is None
        assert kinds(findings) == [FindingKind.MISSING_REQUIRED_FIELD]
