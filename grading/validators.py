"""Validation utilities for grading configuration, rosters and raw scores."""

from typing import Any
import pandas as pd

from .config_schema import SORT_ORDERS, normalization_slots, thresholds_from_mapping

AGGREGATE_MIN = 6
AGGREGATE_MAX = 54


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_thresholds(thresholds: list[dict[str, Any]]) -> list[dict[str, str]]:
    issues = []

    codes = [band.get("code") for band in thresholds]
    duplicates = sorted({c for c in codes if codes.count(c) > 1})
    if duplicates:
        issues.append({
            "type": "error",
            "message": f"Duplicate grade bands: {', '.join(duplicates)}"
        })

    for band in thresholds:
        value = band.get("value", 0)
        if not _is_number(value) or not 1 <= value <= 9:
            issues.append({
                "type": "error",
                "message": f"Grade band '{band.get('code')}' has value {value} (must be 1-9)"
            })

    # Bands are evaluated in listed order, so cut-offs must never increase
    for higher, lower in zip(thresholds, thresholds[1:]):
        if not (_is_number(higher.get("z_cutoff")) and _is_number(lower.get("z_cutoff"))):
            continue
        if lower["z_cutoff"] > higher["z_cutoff"]:
            issues.append({
                "type": "error",
                "message": (
                    f"Threshold for {lower.get('code')} ({lower.get('z_cutoff')}) is above "
                    f"{higher.get('code')} ({higher.get('z_cutoff')})"
                )
            })

    return issues


def _validate_categories(categories: list[dict[str, Any]]) -> list[dict[str, str]]:
    issues = []

    # Ranges with missing or non-numeric bounds are reported by the settings model
    categories = [c for c in categories if _is_number(c.get("min")) and _is_number(c.get("max"))]

    for category in categories:
        cat_min = category["min"]
        cat_max = category["max"]
        label = category.get("label", "Unknown")

        if cat_min > cat_max:
            issues.append({
                "type": "error",
                "message": f"Category '{label}' has min {cat_min} above max {cat_max}"
            })
        elif cat_min < AGGREGATE_MIN or cat_max > AGGREGATE_MAX:
            issues.append({
                "type": "warning",
                "message": f"Category '{label}' range ({cat_min}-{cat_max}) is outside aggregate range ({AGGREGATE_MIN}-{AGGREGATE_MAX})"
            })

    # Check gaps and overlaps between consecutive ranges
    ordered = sorted(
        (c for c in categories if c.get("min", 0) <= c.get("max", 0)),
        key=lambda c: c.get("min", 0)
    )
    for current, following in zip(ordered, ordered[1:]):
        if following["min"] <= current["max"]:
            issues.append({
                "type": "warning",
                "message": f"Categories '{current.get('label')}' and '{following.get('label')}' overlap"
            })
        elif following["min"] > current["max"] + 1:
            issues.append({
                "type": "warning",
                "message": f"Aggregates between {current['max']} and {following['min']} match no category"
            })

    return issues


def validate_config(config: dict[str, Any]) -> list[dict[str, str]]:
    """
    Validate configuration and return list of issues.

    Returns:
        List of dicts with 'type' (error/warning) and 'message'.
    """
    issues = []

    subjects = config.get("subjects", [])
    core_subjects = config.get("core_subjects", [])

    if not subjects:
        issues.append({
            "type": "error",
            "message": "No subjects defined"
        })

    missing_cores = [s for s in core_subjects if s not in subjects]
    if missing_cores:
        issues.append({
            "type": "warning",
            "message": f"Core subjects not in subject list: {', '.join(missing_cores)}"
        })

    core_count = sum(1 for s in subjects if s in core_subjects)
    elective_count = len(subjects) - core_count
    if subjects and (core_count < 4 or elective_count < 2):
        issues.append({
            "type": "warning",
            "message": f"{core_count} core and {elective_count} elective subjects; best-six aggregate will cover fewer than six"
        })

    thresholds = config.get("grading_thresholds", [])
    if isinstance(thresholds, dict):
        thresholds = thresholds_from_mapping(thresholds)
    issues.extend(_validate_thresholds(thresholds))

    issues.extend(_validate_categories(config.get("category_thresholds", [])))

    # Check SBA weights sum to 100%
    sba = config.get("sba") or {}
    if sba.get("enabled", False):
        total_weight = sba.get("sba_weight", 0) + sba.get("exam_weight", 0)
        if abs(total_weight - 100) > 0.001:
            issues.append({
                "type": "warning",
                "message": f"SBA and exam weights sum to {total_weight:g}% (should be 100%)"
            })

    for slot in normalization_slots(config.get("normalization")):
        subject = slot.get("subject", "")
        if slot.get("enabled", False) and slot.get("max_score", 0) <= 0:
            issues.append({
                "type": "error",
                "message": f"Normalization for '{subject}' needs a maximum score above 0"
            })
        if subjects and subject not in subjects:
            issues.append({
                "type": "warning",
                "message": f"Normalization subject '{subject}' is not in the subject list"
            })

    if config.get("normalization_mode", "single") not in ("single", "per_subject"):
        issues.append({
            "type": "error",
            "message": f"Unknown normalization mode: {config.get('normalization_mode')}"
        })

    # Single mode reads the first slot only, whether or not it is enabled
    slots = normalization_slots(config.get("normalization"))
    if config.get("normalization_mode", "single") == "single" and len(slots) > 1:
        ignored = ", ".join(str(slot.get("subject", "")) for slot in slots[1:])
        issues.append({
            "type": "warning",
            "message": (
                f"Normalization mode 'single' honors only the first slot "
                f"({slots[0].get('subject', '')}); ignoring: {ignored}"
            )
        })

    sort_order = config.get("sort_order")
    if sort_order is not None and sort_order not in SORT_ORDERS:
        issues.append({
            "type": "error",
            "message": f"Unknown sort order: {sort_order}"
        })

    return issues


def validate_scores(
    scores_df: pd.DataFrame,
    config: dict[str, Any]
) -> list[dict[str, Any]]:
    """
    Validate raw scores in a roster DataFrame.

    Score columns are ``<subject> A``, ``<subject> B`` and ``<subject> SBA``.
    Empty cells are allowed and count as 0.

    Returns:
        List of dicts with 'row', 'column', 'value', and 'message'.
    """
    issues = []

    score_columns = [
        f"{subject} {part}"
        for subject in config.get("subjects", [])
        for part in ("A", "B", "SBA")
    ]

    for col in score_columns:
        if col not in scores_df.columns:
            continue

        for idx, value in scores_df[col].items():
            if pd.isna(value) or value == "":
                continue

            try:
                num_value = float(value)
                if num_value < 0:
                    issues.append({
                        "row": idx,
                        "column": col,
                        "value": value,
                        "message": f"Score {value} is negative"
                    })
            except (ValueError, TypeError):
                issues.append({
                    "row": idx,
                    "column": col,
                    "value": value,
                    "message": f"Invalid score value: {value}"
                })

    return issues


def validate_students(students: list[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Validate roster entries (dicts with 'id' and 'name') and return issues.

    Returns:
        List of dicts with 'type' and 'message'.
    """
    issues = []

    if not students:
        issues.append({
            "type": "error",
            "message": "No students provided"
        })
        return issues

    # Check for duplicate ids
    seen = set()
    duplicates = []
    for student in students:
        student_id = student.get("id")
        if student_id in seen:
            duplicates.append(str(student_id))
        seen.add(student_id)

    if duplicates:
        issues.append({
            "type": "warning",
            "message": f"Duplicate student ids: {', '.join(duplicates)}"
        })

    # Check for empty names
    empty_count = sum(1 for s in students if not str(s.get("name", "")).strip())
    if empty_count:
        issues.append({
            "type": "warning",
            "message": f"{empty_count} empty student name(s) found"
        })

    return issues
