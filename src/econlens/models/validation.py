from enum import StrEnum

from econlens.models.common import ApiModel


class FindingKind(StrEnum):
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_ALLOCATION_SUM = "INVALID_ALLOCATION_SUM"
    INVALID_DOLLAR_CONSISTENCY = "INVALID_DOLLAR_CONSISTENCY"
    UNSUPPORTED_ASSET_TYPE = "UNSUPPORTED_ASSET_TYPE"
    INVALID_SYMBOL_FORMAT = "INVALID_SYMBOL_FORMAT"
    DUPLICATE_SYMBOL = "DUPLICATE_SYMBOL"
    CARDINALITY_VIOLATION = "CARDINALITY_VIOLATION"
    OUT_OF_RANGE_FIELD = "OUT_OF_RANGE_FIELD"
    CONCENTRATION_WARNING = "CONCENTRATION_WARNING"
    MISSING_CATEGORY_MAPPING = "MISSING_CATEGORY_MAPPING"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationFinding(ApiModel):
    kind: FindingKind
    severity: Severity = Severity.ERROR
    message: str
    field: str | None = None
    value: str | float | None = None
    expected: str | None = None
    asset_index: int | None = None
    related_index: int | None = None
    suggested_fix: str | None = None

    @property
    def is_blocking(self) -> bool:
        return self.severity == Severity.ERROR


def has_blocking(findings: list[ValidationFinding]) -> bool:
    return any(f.is_blocking for f in findings)
