"""
Day reports joining cases and hospitalizations for one date.

Hospitalization rates are re-expressed per 100,000 of each vaccination
cohort, using cohort populations back-computed from the cases data.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from ontariovax.config.settings import ValidationConfig
from ontariovax.domain.rates import cases_from_population_and_rate, rate_per_100k
from ontariovax.domain.records import CasesRecord, HospitalizationRecord
from ontariovax.domain.rules import (
    DEFAULT_RULES,
    validate_cases_record,
    validate_hospitalization_record,
)
from ontariovax.errors import CrossValidationError, DateMismatchError

KEY_FORMAT = "%Y%m%d"
LABEL_FORMAT = "%Y-%m-%d"


class DayReport(BaseModel):
    """Cases and hospitalizations for a single day."""

    model_config = ConfigDict(frozen=True)

    cases: CasesRecord
    hosps: HospitalizationRecord

    @model_validator(mode="after")
    def check_dates_match(self) -> "DayReport":
        """Both records must describe the same day."""
        if self.cases.date != self.hosps.date:
            msg = (
                "cases and hospitalization dates do not match: "
                f"{self.cases.date.isoformat()} != {self.hosps.date.isoformat()}"
            )
            raise DateMismatchError(msg)
        return self

    @property
    def key(self) -> str:
        """Storage and index key, YYYYMMDD."""
        return self.cases.date.strftime(KEY_FORMAT)

    @property
    def label(self) -> str:
        """Chart label, YYYY-MM-DD."""
        return self.cases.date.strftime(LABEL_FORMAT)

    def cross_validate(self) -> None:
        """
        Check that source rates and case counts agree.

        Recomputes the unvaccinated (when known) and fully vaccinated case
        counts from the back-computed populations and rounds them half away
        from zero. Both must equal the reported counts.

        Raises:
            CrossValidationError: If a recomputed count differs.
        """
        unvac_population = self.cases.unvac_population()
        if unvac_population is not None and self.cases.cases_unvac_rate_per100k is not None:
            calculated = cases_from_population_and_rate(
                unvac_population, self.cases.cases_unvac_rate_per100k
            )
            reported = self.cases.covid19_cases_unvac or 0
            if calculated != reported:
                msg = (
                    f"The unvac cases for {self.key} did not match "
                    f"calculated: {calculated} expected: {reported}"
                )
                raise CrossValidationError(msg)

        calculated = cases_from_population_and_rate(
            self.cases.full_vac_population(), self.cases.cases_full_vac_rate_per100k
        )
        if calculated != self.cases.covid19_cases_full_vac:
            msg = (
                f"The full vac cases for {self.key} did not match "
                f"calculated: {calculated} expected: {self.cases.covid19_cases_full_vac}"
            )
            raise CrossValidationError(msg)

    def icu_unvac_rate_per100k(self) -> Decimal | None:
        return rate_per_100k(self.hosps.icu_unvac, self.cases.unvac_population())

    def icu_partial_vac_rate_per100k(self) -> Decimal | None:
        return rate_per_100k(self.hosps.icu_partial_vac, self.cases.partial_vac_population())

    def icu_full_vac_rate_per100k(self) -> Decimal:
        return rate_per_100k(self.hosps.icu_full_vac, self.cases.full_vac_population())  # type: ignore[return-value]

    def nonicu_unvac_rate_per100k(self) -> Decimal | None:
        return rate_per_100k(self.hosps.hospitalnonicu_unvac, self.cases.unvac_population())

    def nonicu_partial_vac_rate_per100k(self) -> Decimal | None:
        return rate_per_100k(
            self.hosps.hospitalnonicu_partial_vac, self.cases.partial_vac_population()
        )

    def nonicu_full_vac_rate_per100k(self) -> Decimal:
        return rate_per_100k(  # type: ignore[return-value]
            self.hosps.hospitalnonicu_full_vac, self.cases.full_vac_population()
        )


def build_day_report(
    cases: CasesRecord,
    hosps: HospitalizationRecord,
    rules: ValidationConfig = DEFAULT_RULES,
) -> DayReport:
    """
    Join a cases and a hospitalization record into a checked day report.

    Args:
        cases: Validated cases record.
        hosps: Validated hospitalization record for the same date.
        rules: Value constraints re-applied to both records.

    Returns:
        A DayReport that passed cross-validation.

    Raises:
        InvalidValueError: If either record breaks a value constraint.
        DateMismatchError: If the record dates differ.
        CrossValidationError: If rates and counts disagree.
    """
    validate_cases_record(cases, rules)
    validate_hospitalization_record(hosps, rules)
    report = DayReport(cases=cases, hosps=hosps)
    report.cross_validate()
    return report
