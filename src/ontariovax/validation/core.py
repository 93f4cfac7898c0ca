"""
Core validation logic for source files.

Checks each configured source file against its registered layout and
counts the rows that would survive the record transform.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ontariovax.config.settings import PipelineConfig
from ontariovax.errors import RowError, SchemaMismatchError
from ontariovax.ingestion.loaders import open_source
from ontariovax.ingestion.sources import DatasetKind
from ontariovax.schemas.registry import SchemaRegistry
from ontariovax.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single source file."""

    dataset_name: str
    schema_name: str | None
    file_path: Path
    exists: bool
    schema_valid: bool | None
    row_count: int | None
    error_message: str | None
    rejected_rows: int = 0
    row_errors: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """A missing file or a schema failure fails; skipped header checks pass."""
        return self.exists and self.schema_valid is not False


# Dataset to registered schema name
DATASET_SCHEMA_MAP: dict[DatasetKind, str] = {
    DatasetKind.CASES: "cases",
    DatasetKind.HOSPITALIZATIONS: "hospitalizations",
}


class ValidationRunner:
    """
    Runs validation for both configured source files.

    The JSON layout declares its fields, which are compared with the
    registered schema. The CSV layout has no declared fields, so only
    the rows are checked.
    """

    def __init__(self, config: PipelineConfig, max_row_errors: int = 5) -> None:
        """
        Initialize validation runner.

        Args:
            config: Pipeline configuration containing data paths.
            max_row_errors: Row error messages to keep per dataset.
        """
        self.config = config
        self.max_row_errors = max_row_errors

    def run(self) -> list[ValidationResult]:
        """Validate every dataset, one result each."""
        return [self.validate_dataset(kind) for kind in DatasetKind]

    def validate_dataset(self, kind: DatasetKind, path: Path | None = None) -> ValidationResult:
        """
        Validate a single dataset.

        Args:
            kind: Dataset to validate.
            path: Source file, overriding the configured path.
        """
        file_path = path or self.config.data_paths.resolve(kind.value)
        schema_name = DATASET_SCHEMA_MAP[kind]
        info = SchemaRegistry.get_info(schema_name)

        if not file_path.exists():
            log.warning("Data file not found", dataset=kind.value, path=str(file_path))
            return ValidationResult(
                dataset_name=kind.value,
                schema_name=schema_name,
                file_path=file_path,
                exists=False,
                schema_valid=None,
                row_count=None,
                error_message="File not found",
            )

        try:
            source = open_source(kind, file_path, self.config.validation)
            source.check_schema()
        except SchemaMismatchError as e:
            log.error(
                "Schema validation failed",
                dataset=kind.value,
                schema=f"{info.name} v{info.version}",
                error=str(e),
            )
            return ValidationResult(
                dataset_name=kind.value,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=None,
                error_message=str(e),
            )
        except (OSError, ValueError) as e:
            error_msg = f"{type(e).__name__}: {e!s}"
            log.error("Validation error", dataset=kind.value, error=error_msg)
            return ValidationResult(
                dataset_name=kind.value,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                row_count=None,
                error_message=error_msg,
            )

        rejected = 0
        row_errors: list[str] = []
        for row in source.rows():
            try:
                source.transform(row)
            except RowError as e:
                rejected += 1
                if len(row_errors) < self.max_row_errors:
                    row_errors.append(f"row {row.number}: {e}")

        header_checked = source.layout == "json"
        log.info(
            "Validation passed" if header_checked else "Rows checked",
            dataset=kind.value,
            schema=schema_name,
            rows=source.row_count,
            rejected=rejected,
        )
        return ValidationResult(
            dataset_name=kind.value,
            schema_name=schema_name,
            file_path=file_path,
            exists=True,
            schema_valid=True if header_checked else None,
            row_count=source.row_count,
            error_message=None if header_checked else "No header check for CSV layout",
            rejected_rows=rejected,
            row_errors=row_errors,
        )
