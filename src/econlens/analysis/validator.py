import logging
import re
from enum import StrEnum

from econlens.analysis.risk import ConcentrationRiskScorer
from econlens.config import VALIDATION_LIMITS, EngineConfig
from econlens.models.common import AssetCategory, AssetType, Region
from econlens.models.portfolio import (
    CandidateAsset,
    Portfolio,
    PortfolioAsset,
    PortfolioSubmission,
)
from econlens.models.validation import (
    FindingKind,
    Severity,
    ValidationFinding,
    has_blocking,
)

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9]{1,20}$")

REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("symbol", "symbol"),
    ("name", "name"),
    ("asset_type", "assetType"),
    ("allocation_percentage", "allocationPercentage"),
    ("dollar_amount", "dollarAmount"),
)

ENUM_FIELDS: tuple[tuple[str, str, type[StrEnum]], ...] = (
    ("asset_type", "assetType", AssetType),
    ("asset_category", "assetCategory", AssetCategory),
    ("geographic_region", "geographicRegion", Region),
)


def _missing_fields(asset: CandidateAsset) -> list[str]:
    missing: list[str] = []
    for attr, api_name in REQUIRED_FIELDS:
        val = getattr(asset, attr)
        if val is None or (isinstance(val, str) and not val.strip()):
            missing.append(api_name)
    return missing


def _label(asset: CandidateAsset, index: int) -> str:
    if asset.symbol:
        return f"Asset {index + 1} ({asset.symbol})"
    return f"Asset {index + 1}"


class AllocationValidator:
    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def validate(
        self, assets: list[CandidateAsset], declared_total: float
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []

        findings.extend(self._check_cardinality(assets))

        complete: list[int] = []
        for i, asset in enumerate(assets):
            missing = _missing_fields(asset)
            if missing:
                findings.append(
                    ValidationFinding(
                        kind=FindingKind.MISSING_REQUIRED_FIELD,
                        message=(
                            f"{_label(asset, i)}: missing required field(s) "
                            f"{', '.join(missing)}"
                        ),
                        field=missing[0],
                        asset_index=i,
                        suggested_fix=(
                            "Provide symbol, name, asset type, allocation % "
                            "and dollar amount"
                        ),
                    )
                )
            else:
                complete.append(i)

        for i, asset in enumerate(assets):
            findings.extend(self._check_symbol(asset, i))
            findings.extend(self._check_enums(asset, i))
            findings.extend(self._check_bounds(asset, i))

        findings.extend(self._check_duplicates(assets))

        if assets and len(complete) == len(assets):
            findings.extend(self._check_allocation_sum(assets))
            findings.extend(self._check_dollar_consistency(assets, declared_total))
            findings.extend(self._check_concentration(assets))

        logger.debug(
            "Validated %d asset(s): %d finding(s), %d blocking",
            len(assets),
            len(findings),
            sum(1 for f in findings if f.is_blocking),
        )
        return findings

    def validate_submission(
        self, submission: PortfolioSubmission
    ) -> list[ValidationFinding]:
        findings = self._check_metadata(submission)
        findings.extend(self.validate(submission.assets, submission.total_value))
        return findings

    def accept(
        self, submission: PortfolioSubmission
    ) -> tuple[Portfolio | None, list[ValidationFinding]]:
        findings = self.validate_submission(submission)
        if has_blocking(findings):
            return None, findings

        assets = [
            PortfolioAsset.model_validate(a.model_dump(exclude_none=True))
            for a in submission.assets
        ]
        scorer = ConcentrationRiskScorer(self.config.risk_weights)
        portfolio = Portfolio(
            id=submission.id,
            name=submission.name,
            description=submission.description,
            total_value=submission.total_value,
            currency=submission.currency,
            assets=assets,
            risk_profile=scorer.score(assets),
        )
        return portfolio, findings

    def _check_metadata(
        self, submission: PortfolioSubmission
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        name = submission.name.strip()
        max_name = int(VALIDATION_LIMITS["max_name_length"])
        max_desc = int(VALIDATION_LIMITS["max_description_length"])
        if not name or len(name) > max_name:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=(
                        "Portfolio name is required"
                        if not name
                        else f"Portfolio name is {len(name)} characters long"
                    ),
                    field="name",
                    value=len(name),
                    expected=f"1-{max_name} characters",
                )
            )
        if submission.description and len(submission.description) > max_desc:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=(
                        f"Description is {len(submission.description)} "
                        "characters long"
                    ),
                    field="description",
                    value=len(submission.description),
                    expected=f"at most {max_desc} characters",
                )
            )
        return findings

    def _check_cardinality(
        self, assets: list[CandidateAsset]
    ) -> list[ValidationFinding]:
        n = len(assets)
        lo, hi = self.config.min_assets, self.config.max_assets
        if lo <= n <= hi:
            return []
        return [
            ValidationFinding(
                kind=FindingKind.CARDINALITY_VIOLATION,
                message=f"Portfolio has {n} asset(s), expected between {lo} and {hi}",
                field="assets",
                value=n,
                expected=f"{lo}-{hi} assets",
                suggested_fix=(
                    "Add at least one asset" if n < lo else "Consolidate holdings"
                ),
            )
        ]

    def _check_symbol(
        self, asset: CandidateAsset, index: int
    ) -> list[ValidationFinding]:
        if asset.symbol is None or not asset.symbol.strip():
            return []
        if SYMBOL_PATTERN.fullmatch(asset.symbol):
            return []
        return [
            ValidationFinding(
                kind=FindingKind.INVALID_SYMBOL_FORMAT,
                message=f"Invalid symbol format: {asset.symbol}",
                field="symbol",
                value=asset.symbol,
                expected="1-20 alphanumeric characters",
                asset_index=index,
                suggested_fix="Use 1-20 alphanumeric characters only",
            )
        ]

    def _check_enums(
        self, asset: CandidateAsset, index: int
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for attr, api_name, enum_cls in ENUM_FIELDS:
            raw = getattr(asset, attr)
            if raw is None or not raw.strip():
                continue
            allowed = [m.value for m in enum_cls]
            if raw in allowed:
                continue
            findings.append(
                ValidationFinding(
                    kind=FindingKind.UNSUPPORTED_ASSET_TYPE,
                    message=f"{_label(asset, index)}: unsupported {api_name} '{raw}'",
                    field=api_name,
                    value=raw,
                    expected=", ".join(allowed),
                    asset_index=index,
                    suggested_fix=f"Use one of: {', '.join(allowed)}",
                )
            )
        return findings

    def _check_bounds(
        self, asset: CandidateAsset, index: int
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        label = _label(asset, index)

        alloc = asset.allocation_percentage
        if alloc is not None and not (0 < alloc <= 100):
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=f"{label}: allocation {alloc}% is outside (0, 100]",
                    field="allocationPercentage",
                    value=alloc,
                    expected="greater than 0 and at most 100",
                    asset_index=index,
                )
            )

        amount = asset.dollar_amount
        if amount is not None and amount < 0:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=f"{label}: dollar amount cannot be negative ({amount})",
                    field="dollarAmount",
                    value=amount,
                    expected=">= 0",
                    asset_index=index,
                )
            )
        elif amount is not None and amount > self.config.max_dollar_amount:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=(
                        f"{label}: dollar amount {amount:,.2f} exceeds "
                        f"{self.config.max_dollar_amount:,.0f}"
                    ),
                    field="dollarAmount",
                    value=amount,
                    expected=f"<= {self.config.max_dollar_amount:,.0f}",
                    asset_index=index,
                )
            )

        rating = asset.risk_rating
        if rating is not None and not (1 <= rating <= 10):
            findings.append(
                ValidationFinding(
                    kind=FindingKind.OUT_OF_RANGE_FIELD,
                    message=f"{label}: risk rating {rating} is outside [1, 10]",
                    field="riskRating",
                    value=rating,
                    expected="1-10",
                    asset_index=index,
                )
            )
        return findings

    def _check_duplicates(
        self, assets: list[CandidateAsset]
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        first_seen: dict[str, int] = {}
        for i, asset in enumerate(assets):
            if asset.symbol is None or not asset.symbol.strip():
                continue
            key = asset.symbol.strip().upper()
            if key not in first_seen:
                first_seen[key] = i
                continue
            j = first_seen[key]
            findings.append(
                ValidationFinding(
                    kind=FindingKind.DUPLICATE_SYMBOL,
                    message=(
                        f"Duplicate symbol {key} at positions {j + 1} and {i + 1}"
                    ),
                    field="symbol",
                    value=asset.symbol,
                    asset_index=i,
                    related_index=j,
                    suggested_fix="Merge duplicate holdings into a single entry",
                )
            )
        return findings

    def _check_allocation_sum(
        self, assets: list[CandidateAsset]
    ) -> list[ValidationFinding]:
        total = sum(a.allocation_percentage or 0.0 for a in assets)
        if abs(total - 100.0) <= self.config.allocation_tolerance:
            return []
        return [
            ValidationFinding(
                kind=FindingKind.INVALID_ALLOCATION_SUM,
                message=f"Portfolio allocation sums to {total:.2f}%, expected 100%",
                field="allocationPercentage",
                value=round(total, 4),
                expected="100 +/- 0.01",
                suggested_fix="Adjust individual asset allocations to sum to 100%",
            )
        ]

    def _check_dollar_consistency(
        self, assets: list[CandidateAsset], declared_total: float
    ) -> list[ValidationFinding]:
        total = sum(a.dollar_amount or 0.0 for a in assets)
        if abs(total - declared_total) <= self.config.dollar_tolerance:
            return []
        return [
            ValidationFinding(
                kind=FindingKind.INVALID_DOLLAR_CONSISTENCY,
                message=(
                    f"Asset dollar amounts sum to ${total:,.2f}, "
                    f"portfolio total is ${declared_total:,.2f}"
                ),
                field="dollarAmount",
                value=round(total, 2),
                expected=f"{declared_total:.2f} +/- 0.01",
                suggested_fix="Adjust dollar amounts to match portfolio total",
            )
        ]

    def _check_concentration(
        self, assets: list[CandidateAsset]
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []

        top_index, top = max(
            enumerate(assets), key=lambda pair: pair[1].allocation_percentage or 0.0
        )
        top_alloc = top.allocation_percentage or 0.0
        if top_alloc > self.config.max_single_allocation:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.CONCENTRATION_WARNING,
                    severity=Severity.WARNING,
                    message=(
                        f"Single asset allocation of {top_alloc:.1f}% exceeds "
                        f"{self.config.max_single_allocation:.0f}% limit"
                    ),
                    field="allocationPercentage",
                    value=top_alloc,
                    asset_index=top_index,
                    suggested_fix="Consider diversifying to reduce concentration risk",
                )
            )

        cash = sum(
            a.allocation_percentage or 0.0
            for a in assets
            if a.asset_type == AssetType.CASH
        )
        if cash > self.config.max_cash_allocation:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.CONCENTRATION_WARNING,
                    severity=Severity.WARNING,
                    message=(
                        f"Cash allocation of {cash:.1f}% exceeds "
                        f"{self.config.max_cash_allocation:.0f}% limit"
                    ),
                    field="assetType",
                    value=cash,
                    suggested_fix="Consider investing excess cash for better returns",
                )
            )
        return findings
