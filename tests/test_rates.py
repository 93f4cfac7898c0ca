"""Tests for fixed-point rate arithmetic."""

from decimal import Decimal

from ontariovax.domain.rates import (
    cases_from_population_and_rate,
    chart_float,
    population_from_cases_and_rate,
    rate_per_100k,
    round_half_away,
)


class TestRoundHalfAway:
    """Ties round away from zero in both directions."""

    def test_positive_tie(self) -> None:
        assert round_half_away(Decimal("2.5")) == Decimal("3")
        assert round_half_away(Decimal("2.345"), 2) == Decimal("2.35")

    def test_negative_tie(self) -> None:
        assert round_half_away(Decimal("-2.5")) == Decimal("-3")
        assert round_half_away(Decimal("-2.345"), 2) == Decimal("-2.35")

    def test_below_tie_rounds_down(self) -> None:
        assert round_half_away(Decimal("2.4999")) == Decimal("2")


class TestPopulation:
    """Tests for back-computing cohort populations."""

    def test_population_from_cases_and_rate(self) -> None:
        """100 cases at 10 per 100k means a population of one million."""
        assert population_from_cases_and_rate(100, Decimal("10")) == Decimal("1000000")

    def test_zero_rate_gives_zero_population(self) -> None:
        assert population_from_cases_and_rate(42, Decimal("0")) == Decimal(0)

    def test_round_trip_recovers_cases(self) -> None:
        """Recomputing cases from the derived population returns the input."""
        for cases, rate in [(100, "10.5"), (50, "0.75"), (1234, "17.31"), (7, "3.3")]:
            population = population_from_cases_and_rate(cases, Decimal(rate))
            assert cases_from_population_and_rate(population, Decimal(rate)) == cases


class TestRatePer100k:
    """Tests for expressing counts per 100k."""

    def test_rate(self) -> None:
        assert rate_per_100k(20, Decimal("1000000")) == Decimal("2")

    def test_unknown_population(self) -> None:
        assert rate_per_100k(20, None) is None

    def test_zero_population(self) -> None:
        assert rate_per_100k(20, Decimal(0)) == Decimal(0)


class TestChartFloat:
    """Tests for chart value conversion."""

    def test_rounds_to_two_places(self) -> None:
        assert chart_float(Decimal("2.345")) == 2.35
        assert chart_float(Decimal("0.2449")) == 0.24

    def test_absent_value_is_zero(self) -> None:
        assert chart_float(None) == 0.0

    def test_custom_places(self) -> None:
        assert chart_float(Decimal("1.25"), places=1) == 1.3
