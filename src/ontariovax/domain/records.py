"""
Typed daily records for cases and hospitalizations by vaccination status.

Records are immutable. They are produced by the transformers in
``ontariovax.transform`` and checked by ``ontariovax.domain.rules``.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ontariovax.domain.rates import population_from_cases_and_rate


def _population(cases: int | None, rate: Decimal | None) -> Decimal | None:
    if cases is None or rate is None:
        return None
    return population_from_cases_and_rate(cases, rate)


class CasesRecord(BaseModel):
    """
    Daily COVID-19 cases split by vaccination cohort.

    ``covid19_cases_full_vac`` and its rate per 100k are always present.
    The not-fully-vaccinated aggregate and the boosted cohort only exist
    in newer source layouts.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Source row identifier")
    date: date

    covid19_cases_unvac: int | None = None
    covid19_cases_partial_vac: int | None = None
    covid19_cases_notfull_vac: int | None = None
    covid19_cases_full_vac: int
    covid19_cases_boost_vac: int | None = None
    covid19_cases_vac_unknown: int | None = None

    cases_unvac_rate_per100k: Decimal | None = None
    cases_partial_vac_rate_per100k: Decimal | None = None
    cases_notfull_vac_rate_per100k: Decimal | None = None
    cases_full_vac_rate_per100k: Decimal
    cases_boost_vac_rate_per100k: Decimal | None = None

    cases_unvac_rate_7ma: Decimal | None = None
    cases_partial_vac_rate_7ma: Decimal | None = None
    cases_notfull_vac_rate_7ma: Decimal | None = None
    cases_full_vac_rate_7ma: Decimal | None = None
    cases_boost_vac_rate_7ma: Decimal | None = None

    def unvac_population(self) -> Decimal | None:
        """Unvaccinated population, None when the count or rate is unknown."""
        return _population(self.covid19_cases_unvac, self.cases_unvac_rate_per100k)

    def partial_vac_population(self) -> Decimal | None:
        return _population(
            self.covid19_cases_partial_vac, self.cases_partial_vac_rate_per100k
        )

    def notfull_vac_population(self) -> Decimal | None:
        return _population(
            self.covid19_cases_notfull_vac, self.cases_notfull_vac_rate_per100k
        )

    def full_vac_population(self) -> Decimal:
        return population_from_cases_and_rate(
            self.covid19_cases_full_vac, self.cases_full_vac_rate_per100k
        )

    def boost_vac_population(self) -> Decimal | None:
        return _population(
            self.covid19_cases_boost_vac, self.cases_boost_vac_rate_per100k
        )


class HospitalizationRecord(BaseModel):
    """Daily ICU and non-ICU hospital admissions by vaccination cohort."""

    model_config = ConfigDict(frozen=True)

    id: int
    date: date

    icu_unvac: int
    icu_partial_vac: int
    icu_full_vac: int
    hospitalnonicu_unvac: int
    hospitalnonicu_partial_vac: int
    hospitalnonicu_full_vac: int
