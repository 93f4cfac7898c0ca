"""
Per-record value constraints.

Validators are pure functions of a fully built record. They raise
InvalidValueError carrying the offending value as a string.
"""

from decimal import Decimal

from ontariovax.config.settings import ValidationConfig
from ontariovax.domain.records import CasesRecord, HospitalizationRecord
from ontariovax.errors import InvalidValueError

DEFAULT_RULES = ValidationConfig()

CASE_COUNT_FIELDS = (
    "covid19_cases_unvac",
    "covid19_cases_partial_vac",
    "covid19_cases_notfull_vac",
    "covid19_cases_full_vac",
    "covid19_cases_boost_vac",
    "covid19_cases_vac_unknown",
)

CASE_RATE_FIELDS = (
    "cases_unvac_rate_per100k",
    "cases_partial_vac_rate_per100k",
    "cases_notfull_vac_rate_per100k",
    "cases_full_vac_rate_per100k",
    "cases_boost_vac_rate_per100k",
    "cases_unvac_rate_7ma",
    "cases_partial_vac_rate_7ma",
    "cases_notfull_vac_rate_7ma",
    "cases_full_vac_rate_7ma",
    "cases_boost_vac_rate_7ma",
)

HOSPITALIZATION_COUNT_FIELDS = (
    "icu_unvac",
    "icu_partial_vac",
    "icu_full_vac",
    "hospitalnonicu_unvac",
    "hospitalnonicu_partial_vac",
    "hospitalnonicu_full_vac",
)


def _check_date(record: CasesRecord | HospitalizationRecord, rules: ValidationConfig) -> None:
    if record.date < rules.min_date:
        raise InvalidValueError(record.date.strftime("%Y-%m-%d"), "date")


def _check_counts(record: CasesRecord | HospitalizationRecord, fields: tuple[str, ...]) -> None:
    for name in fields:
        value: int | None = getattr(record, name)
        if value is not None and value < 0:
            raise InvalidValueError(str(value), name)


def _check_rate(name: str, value: Decimal | None, rules: ValidationConfig) -> None:
    if value is None or not rules.enforce_rate_bounds:
        return
    if value < 0 or value > rules.rate_upper_bound:
        raise InvalidValueError(str(value), name)


def validate_cases_record(
    record: CasesRecord, rules: ValidationConfig = DEFAULT_RULES
) -> CasesRecord:
    """
    Check a cases record against the value constraints.

    Args:
        record: Fully populated cases record.
        rules: Thresholds to apply.

    Returns:
        The same record, for chaining.

    Raises:
        InvalidValueError: On the first field that breaks a constraint.
    """
    _check_date(record, rules)
    _check_counts(record, CASE_COUNT_FIELDS)
    for name in CASE_RATE_FIELDS:
        _check_rate(name, getattr(record, name), rules)
    return record


def validate_hospitalization_record(
    record: HospitalizationRecord, rules: ValidationConfig = DEFAULT_RULES
) -> HospitalizationRecord:
    """
    Check a hospitalization record against the value constraints.

    Raises:
        InvalidValueError: On the first field that breaks a constraint.
    """
    if record.id < 1:
        raise InvalidValueError(str(record.id), "id")
    _check_date(record, rules)
    _check_counts(record, HOSPITALIZATION_COUNT_FIELDS)
    return record
