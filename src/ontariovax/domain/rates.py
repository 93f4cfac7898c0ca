"""
Fixed-point rate arithmetic.

All rate and population math runs on ``decimal.Decimal``. Floats only
appear at the very end, when values are handed to charts.
"""

from decimal import ROUND_HALF_UP, Decimal

HUNDRED_K = Decimal(100000)
ZERO = Decimal(0)


def round_half_away(value: Decimal, places: int = 0) -> Decimal:
    """
    Round to a number of decimal places, ties away from zero.

    ``ROUND_HALF_UP`` in the decimal module rounds ties away from zero
    for negative values as well.
    """
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def population_from_cases_and_rate(cases: int, rate: Decimal) -> Decimal:
    """
    Back-compute a cohort population from its case count and rate.

    Solves ``rate = cases * 100000 / population`` for the population.
    A zero rate yields a zero population.
    """
    if rate.is_zero():
        return ZERO
    return (Decimal(cases) * HUNDRED_K) / rate


def cases_from_population_and_rate(population: Decimal, rate: Decimal) -> Decimal:
    """Recompute a whole case count from a population and its rate."""
    return round_half_away(population * (rate / HUNDRED_K))


def rate_per_100k(count: int, population: Decimal | None) -> Decimal | None:
    """
    Express a count per 100,000 of a population.

    Returns None when the population is unknown and zero when the
    population is zero.
    """
    if population is None:
        return None
    if population.is_zero():
        return ZERO
    return (Decimal(count) * HUNDRED_K) / population


def chart_float(value: Decimal | None, places: int = 2) -> float:
    """Round a rate for display and convert it to a float; absent is 0.0."""
    if value is None:
        return 0.0
    return float(round_half_away(value, places))
