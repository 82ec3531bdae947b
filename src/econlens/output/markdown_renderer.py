from __future__ import annotations

from datetime import date
from pathlib import Path

from econlens.models.portfolio import Portfolio
from econlens.models.scenario import ScenarioAnalysisResult
from econlens.output.formatters import (
    confidence_bar,
    fmt_delta,
    fmt_dollar,
    fmt_pct,
    fmt_score,
    fmt_share,
    risk_label,
)


class MarkdownRenderer:
    def render(
        self,
        portfolio: Portfolio,
        result: ScenarioAnalysisResult,
        chart_path: Path | None = None,
        charts_rel_dir: str = "charts",
    ) -> str:
        sections: list[str] = []
        sections.append(self._render_header(portfolio, result))
        sections.append(self._render_holdings(portfolio))
        if portfolio.risk_profile:
            sections.append(self._render_risk(portfolio))
        sections.append(self._render_impacts(result))
        if chart_path is not None:
            sections.append(
                f"![Asset impacts]({charts_rel_dir}/{chart_path.name})\n"
            )
        sections.append(self._render_risk_changes(result))
        if result.findings:
            sections.append(self._render_findings(result))
        sections.append(self._render_summary(result))
        return "\n".join(sections)

    def _render_header(
        self, portfolio: Portfolio, result: ScenarioAnalysisResult
    ) -> str:
        today = date.today().isoformat()
        return (
            f"# Scenario Analysis: {portfolio.name}\n\n"
            f"**Scenario:** {result.scenario_name} (`{result.scenario_id.value}`)  \n"
            f"**Portfolio Value:** {fmt_dollar(portfolio.total_value)} "
            f"{portfolio.currency}  \n"
            f"**Catalog:** {result.catalog_version}  \n"
            f"**Date:** {today}\n"
        )

    def _render_holdings(self, portfolio: Portfolio) -> str:
        lines = ["## Holdings\n"]
        lines.append("| Symbol | Name | Category | Allocation | Value |")
        lines.append("|--------|------|----------|-----------:|------:|")
        for a in portfolio.assets:
            category = a.asset_category.label if a.asset_category else "N/A"
            lines.append(
                f"| {a.symbol} | {a.name} | {category} |"
                f" {fmt_share(a.allocation_percentage)} | {fmt_dollar(a.dollar_amount)} |"
            )
        return "\n".join(lines) + "\n"

    def _render_risk(self, portfolio: Portfolio) -> str:
        p = portfolio.risk_profile
        if not p:
            return ""
        rows = [
            ("Overall", f"{fmt_score(p.overall_risk_score)} ({risk_label(p.overall_risk_score)})"),
            ("Concentration (HHI)", fmt_score(p.concentration_risk)),
            ("Volatility", fmt_score(p.volatility_score)),
            ("Credit", fmt_score(p.credit_risk)),
            ("Max Sector", fmt_share(p.sector_concentration)),
            ("Max Region", fmt_share(p.geographic_risk)),
        ]
        lines = ["## Risk Profile\n"]
        lines.append("| Metric | Value |")
        lines.append("|--------|------:|")
        for r in rows:
            lines.append(f"| {r[0]} | {r[1]} |")
        return "\n".join(lines) + "\n"

    def _render_impacts(self, result: ScenarioAnalysisResult) -> str:
        lines = ["## Asset Impacts\n"]
        lines.append("| Symbol | Impact | Dollar | Confidence | Drivers |")
        lines.append("|--------|-------:|-------:|------------|---------|")
        for r in result.asset_level_impacts:
            symbol = f"{r.symbol}*" if r.category_fallback else r.symbol
            lines.append(
                f"| {symbol} | {fmt_pct(r.impact_percentage)} |"
                f" {fmt_dollar(r.impact_dollar, signed=True)} |"
                f" {confidence_bar(r.confidence_level)} {r.confidence_level:.0f} |"
                f" {', '.join(r.primary_drivers)} |"
            )
        if any(r.category_fallback for r in result.asset_level_impacts):
            lines.append("\n\\* estimated from a fallback category mapping")
        return "\n".join(lines) + "\n"

    def _render_risk_changes(self, result: ScenarioAnalysisResult) -> str:
        c = result.portfolio_risk_changes
        lines = ["## Risk Changes\n"]
        lines.append("| Metric | Change |")
        lines.append("|--------|-------:|")
        lines.append(f"| Overall Risk | {fmt_delta(c.risk_score_change)} |")
        lines.append(f"| Concentration | {fmt_delta(c.concentration_risk_change)} |")
        lines.append(f"| Volatility | {fmt_delta(c.volatility_change)} |")
        for pair, delta in c.correlation_changes.items():
            lines.append(f"| Correlation {pair} | {fmt_delta(delta)} |")
        return "\n".join(lines) + "\n"

    def _render_findings(self, result: ScenarioAnalysisResult) -> str:
        lines = ["## Notes\n"]
        for f in result.findings:
            lines.append(f"- **{f.kind.value}**: {f.message}")
        return "\n".join(lines) + "\n"

    def _render_summary(self, result: ScenarioAnalysisResult) -> str:
        return (
            "## Summary\n\n"
            f"**Portfolio impact:** {fmt_pct(result.total_impact_percentage)} "
            f"({fmt_dollar(result.total_impact_dollar, signed=True)})  \n"
            f"**Confidence:** {confidence_bar(result.confidence_score)} "
            f"{result.confidence_score:.0f}/100\n"
        )
