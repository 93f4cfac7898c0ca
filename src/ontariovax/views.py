"""
Console views over stored day reports.

Renders the unvaccinated versus fully vaccinated comparison for one day,
the underlying counts and cohort populations, and navigation to the
neighbouring days.
"""

from decimal import Decimal

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from ontariovax.domain.index import Index
from ontariovax.domain.rates import round_half_away
from ontariovax.domain.report import DayReport

NOT_AVAILABLE = "N/A"


def format_rate(value: Decimal | None) -> str:
    """Two decimals, ties away from zero."""
    if value is None:
        return NOT_AVAILABLE
    return str(round_half_away(value, 2))


def format_count(value: int | None) -> str:
    """Whole number with thousands separators."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:,}"


def format_population(value: Decimal | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return format_count(int(round_half_away(value)))


class DayReportView:
    """Rich rendering of a single day report with index navigation."""

    def __init__(self, index: Index, report: DayReport, *, detail: bool = False) -> None:
        """
        Args:
            index: Index the report belongs to.
            report: Report to render.
            detail: Also show partial, not-fully and boosted cohorts.
        """
        self.index = index
        self.report = report
        self.detail = detail

    def rates_table(self) -> Table:
        r = self.report
        table = Table(title=f"Rates per 100,000 on {r.label}", show_header=True)
        table.add_column("Measure", style="cyan")
        table.add_column("Unvaccinated", justify="right")
        if self.detail:
            table.add_column("Partially", justify="right")
            table.add_column("Not fully", justify="right")
        table.add_column("Fully vaccinated", justify="right")
        if self.detail:
            table.add_column("Boosted", justify="right")

        rows = [
            (
                "Cases",
                r.cases.cases_unvac_rate_per100k,
                r.cases.cases_partial_vac_rate_per100k,
                r.cases.cases_notfull_vac_rate_per100k,
                r.cases.cases_full_vac_rate_per100k,
                r.cases.cases_boost_vac_rate_per100k,
            ),
            (
                "Cases (7 day avg)",
                r.cases.cases_unvac_rate_7ma,
                r.cases.cases_partial_vac_rate_7ma,
                r.cases.cases_notfull_vac_rate_7ma,
                r.cases.cases_full_vac_rate_7ma,
                r.cases.cases_boost_vac_rate_7ma,
            ),
            (
                "Hospitalized, not ICU",
                r.nonicu_unvac_rate_per100k(),
                r.nonicu_partial_vac_rate_per100k(),
                None,
                r.nonicu_full_vac_rate_per100k(),
                None,
            ),
            (
                "In ICU",
                r.icu_unvac_rate_per100k(),
                r.icu_partial_vac_rate_per100k(),
                None,
                r.icu_full_vac_rate_per100k(),
                None,
            ),
        ]
        for label, unvac, partial, notfull, full, boost in rows:
            if self.detail:
                cells = [unvac, partial, notfull, full, boost]
            else:
                cells = [unvac, full]
            table.add_row(label, *(format_rate(c) for c in cells))
        return table

    def counts_table(self) -> Table:
        cases, hosps = self.report.cases, self.report.hosps
        table = Table(title="Counts and estimated populations", show_header=True)
        table.add_column("Cohort", style="cyan")
        table.add_column("Cases", justify="right")
        table.add_column("Non-ICU", justify="right")
        table.add_column("ICU", justify="right")
        table.add_column("Population", justify="right")

        table.add_row(
            "Unvaccinated",
            format_count(cases.covid19_cases_unvac),
            format_count(hosps.hospitalnonicu_unvac),
            format_count(hosps.icu_unvac),
            format_population(cases.unvac_population()),
        )
        if self.detail:
            table.add_row(
                "Partially vaccinated",
                format_count(cases.covid19_cases_partial_vac),
                format_count(hosps.hospitalnonicu_partial_vac),
                format_count(hosps.icu_partial_vac),
                format_population(cases.partial_vac_population()),
            )
        table.add_row(
            "Fully vaccinated",
            format_count(cases.covid19_cases_full_vac),
            format_count(hosps.hospitalnonicu_full_vac),
            format_count(hosps.icu_full_vac),
            format_population(cases.full_vac_population()),
        )
        if self.detail:
            table.add_row(
                "Boosted",
                format_count(cases.covid19_cases_boost_vac),
                "-",
                "-",
                format_population(cases.boost_vac_population()),
            )
        return table

    def navigation(self) -> Text:
        key = self.report.key
        position = self.index.position(key)
        previous = self.index.previous(key)
        following = self.index.next(key)

        text = Text()
        if position is not None:
            text.append(f"Report {position + 1} of {len(self.index)}", style="bold")
        text.append(f"   previous: {previous or '-'}   next: {following or '-'}", style="dim")
        return text

    def render(self) -> Group:
        return Group(self.rates_table(), self.counts_table(), self.navigation())

    def print(self, console: Console) -> None:
        console.print(self.render())
