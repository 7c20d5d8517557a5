"""Norm-referenced grading and ranking engine."""

from .config_schema import DEFAULT_CONFIG, GradingConfigError, build_settings, get_default_config, merge_config
from .validators import validate_config, validate_scores, validate_students
from .pipeline import (
    build_series_records,
    compute_class_statistics,
    process_cohort,
    process_students,
    summarize_cohort,
)
from .roster import RosterError, read_roster, results_to_dataframe, students_from_dataframe
from .excel_generator import generate_workbook

__all__ = [
    "DEFAULT_CONFIG",
    "GradingConfigError",
    "build_settings",
    "get_default_config",
    "merge_config",
    "validate_config",
    "validate_scores",
    "validate_students",
    "build_series_records",
    "compute_class_statistics",
    "process_cohort",
    "process_students",
    "summarize_cohort",
    "RosterError",
    "read_roster",
    "results_to_dataframe",
    "students_from_dataframe",
    "generate_workbook",
]
