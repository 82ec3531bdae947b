from econlens.models.validation import Severity
from econlens.output.formatters import (
    confidence_bar,
    fmt_delta,
    fmt_dollar,
    fmt_pct,
    fmt_score,
    fmt_share,
    impact_color,
    risk_label,
    severity_color,
)


class TestFmtPct:
    def test_positive(self):
        assert fmt_pct(12.345) == "+12.35%"

    def test_negative(self):
        assert fmt_pct(-11.0) == "-11.00%"

    def test_none(self):
        assert fmt_pct(None) == "N/A"


class TestFmtShare:
    def test_unsigned(self):
        assert fmt_share(60) == "60.0%"


class TestFmtDollar:
    def test_plain(self):
        assert fmt_dollar(100000) == "$100,000.00"

    def test_negative(self):
        assert fmt_dollar(-11000) == "-$11,000.00"

    def test_signed(self):
        assert fmt_dollar(4000, signed=True) == "+$4,000.00"
        assert fmt_dollar(0, signed=True) == "$0.00"

    def test_none(self):
        assert fmt_dollar(None) == "N/A"


class TestScores:
    def test_fmt_score(self):
        assert fmt_score(5.01) == "5.0/10"

    def test_fmt_delta(self):
        assert fmt_delta(-0.05) == "-0.05"
        assert fmt_delta(0.7712) == "+0.77"

    def test_risk_label(self):
        assert risk_label(8.0) == "Aggressive"
        assert risk_label(5.01) == "Moderate"
        assert risk_label(2.0) == "Conservative"


class TestColors:
    def test_impact_color(self):
        assert impact_color(-25) == "bold red"
        assert impact_color(-1) == "red"
        assert impact_color(0) == "yellow"
        assert impact_color(5) == "green"
        assert impact_color(15) == "bold green"

    def test_severity_color(self):
        assert severity_color(Severity.ERROR) == "bold red"
        assert severity_color(Severity.INFO) == "cyan"


class TestConfidenceBar:
    def test_full(self):
        assert confidence_bar(100) == "██████████"

    def test_partial(self):
        bar = confidence_bar(79)
        assert bar.count("█") == 8
        assert len(bar) == 10

    def test_clamped(self):
        assert confidence_bar(-10) == "░" * 10
