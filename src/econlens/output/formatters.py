from econlens.models.validation import Severity


def fmt_pct(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.{decimals}f}%"


def fmt_share(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{decimals}f}%"


def fmt_dollar(value: float | None, signed: bool = False) -> str:
    if value is None:
        return "N/A"
    sign = "-" if value < 0 else ("+" if signed and value > 0 else "")
    return f"{sign}${abs(value):,.2f}"


def fmt_score(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}/10"


def fmt_delta(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.{decimals}f}"


def impact_color(value: float) -> str:
    if value <= -20:
        return "bold red"
    if value < 0:
        return "red"
    if value == 0:
        return "yellow"
    if value < 10:
        return "green"
    return "bold green"


def risk_color(score: float) -> str:
    if score >= 7:
        return "red"
    if score >= 4:
        return "yellow"
    return "green"


def risk_label(score: float) -> str:
    if score >= 7:
        return "Aggressive"
    if score >= 4:
        return "Moderate"
    return "Conservative"


def severity_color(severity: Severity) -> str:
    colors = {
        Severity.ERROR: "bold red",
        Severity.WARNING: "yellow",
        Severity.INFO: "cyan",
    }
    return colors.get(severity, "white")


def confidence_bar(confidence: float, width: int = 10) -> str:
    """Render a 0-100 confidence as a block bar."""
    filled = round(confidence / 100 * width)
    filled = max(0, min(width, filled))
    return "█" * filled + "░" * (width - filled)
