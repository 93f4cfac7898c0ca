"""Source file validation."""

from ontariovax.validation.core import ValidationResult, ValidationRunner
from ontariovax.validation.reporter import ConsoleReporter

__all__ = ["ValidationResult", "ValidationRunner", "ConsoleReporter"]
