from econlens.models.common import AssetCategory, AssetType, Region, ScenarioId
from econlens.models.portfolio import (
    CandidateAsset,
    Portfolio,
    PortfolioAsset,
    PortfolioSubmission,
    RiskProfile,
)
from econlens.models.scenario import AssetImpactResult, ScenarioAnalysisResult
from econlens.models.validation import FindingKind, Severity, ValidationFinding

__all__ = [
    "AssetCategory",
    "AssetImpactResult",
    "AssetType",
    "CandidateAsset",
    "FindingKind",
    "Portfolio",
    "PortfolioAsset",
    "PortfolioSubmission",
    "Region",
    "RiskProfile",
    "ScenarioAnalysisResult",
    "ScenarioId",
    "Severity",
    "ValidationFinding",
]
