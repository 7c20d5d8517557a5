"""Configuration schema and defaults for norm-referenced grading."""

from typing import Any
import copy

from pydantic import ValidationError

from .models import GradingSettings

# Fixed (code, value, remark) of every band; only the z cut-offs are configurable
GRADE_BANDS: list[dict[str, Any]] = [
    {"code": "A1", "value": 1, "remark": "Excellent"},
    {"code": "B2", "value": 2, "remark": "Very Good"},
    {"code": "B3", "value": 3, "remark": "Good"},
    {"code": "C4", "value": 4, "remark": "Credit"},
    {"code": "C5", "value": 5, "remark": "Credit"},
    {"code": "C6", "value": 6, "remark": "Credit"},
    {"code": "D7", "value": 7, "remark": "Pass"},
    {"code": "E8", "value": 8, "remark": "Pass"},
]

SORT_ORDERS = ["name-asc", "name-desc", "id-asc", "score-desc", "aggregate-asc"]

DEFAULT_CONFIG: dict[str, Any] = {
    "subjects": [
        "English Language",
        "Mathematics",
        "Science",
        "Social Studies",
        "Career Technology",
        "Creative Arts and Designing",
        "Ghana Language (Twi)",
        "Religious and Moral Education",
        "Computing",
        "French"
    ],
    "core_subjects": ["Mathematics", "English Language", "Social Studies", "Science"],
    "grading_thresholds": [
        {"code": "A1", "z_cutoff": 1.645, "value": 1, "remark": "Excellent"},
        {"code": "B2", "z_cutoff": 1.036, "value": 2, "remark": "Very Good"},
        {"code": "B3", "z_cutoff": 0.524, "value": 3, "remark": "Good"},
        {"code": "C4", "z_cutoff": 0, "value": 4, "remark": "Credit"},
        {"code": "C5", "z_cutoff": -0.524, "value": 5, "remark": "Credit"},
        {"code": "C6", "z_cutoff": -1.036, "value": 6, "remark": "Credit"},
        {"code": "D7", "z_cutoff": -1.645, "value": 7, "remark": "Pass"},
        {"code": "E8", "z_cutoff": -2.326, "value": 8, "remark": "Pass"}
    ],
    "fallback_grade": {"code": "F9", "value": 9, "remark": "Fail"},
    "zero_spread_grade": {"code": "C4", "value": 4, "remark": "Credit"},
    "category_thresholds": [
        {"label": "Distinction", "min": 6, "max": 10},
        {"label": "Merit", "min": 11, "max": 20},
        {"label": "Pass", "min": 21, "max": 36},
        {"label": "Fail", "min": 37, "max": 54}
    ],
    "default_category": "Pass",
    "normalization": {
        "enabled": False,
        "subject": "Mathematics",
        "max_score": 100,
        "is_locked": False
    },
    "normalization_mode": "single",
    "sba": {
        "enabled": True,
        "is_locked": False,
        "sba_weight": 30,
        "exam_weight": 70
    },
    "use_t_distribution": False,
    "sort_order": "aggregate-asc",
    "active_period": None,
    "default_facilitator": "TBA",
    "output_file": "broadsheet.xlsx"
}


class GradingConfigError(ValueError):
    """Raised when a configuration cannot be turned into grading settings."""

    def __init__(self, issues: list[dict[str, str]]):
        self.issues = issues
        super().__init__("; ".join(issue["message"] for issue in issues))


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(user_config: dict[str, Any]) -> dict[str, Any]:
    """
    Merge user configuration with defaults.

    User config values override defaults. Missing keys use default values.
    Nested dicts are updated key by key; lists are replaced whole.
    """
    result = get_default_config()

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key].update(value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def thresholds_from_mapping(mapping: dict[str, float]) -> list[dict[str, Any]]:
    """
    Convert the legacy ``{"A1": 1.645, ...}`` form into an ordered band list.

    Bands are ordered by the fixed band table, not by key order.
    """
    bands = []
    for band in GRADE_BANDS:
        if band["code"] in mapping:
            bands.append({**band, "z_cutoff": mapping[band["code"]]})
    return bands


def normalization_slots(normalization: dict | list | None) -> list[dict[str, Any]]:
    """A single normalization slot or a list of them, as a list."""
    if not normalization:
        return []
    if isinstance(normalization, dict):
        return [normalization]
    return list(normalization)


def build_settings(config: dict[str, Any]) -> GradingSettings:
    """
    Build immutable grading settings from a configuration dict.

    The dict is merged with the defaults first.

    Raises:
        GradingConfigError: If validation reports any error, or a value
            does not fit the settings model (a band without a remark,
            a category without a label, ...)
    """
    # Imported here; validators depends on this module's constants
    from .validators import validate_config

    config = merge_config(config)
    errors = [issue for issue in validate_config(config) if issue["type"] == "error"]
    if errors:
        raise GradingConfigError(errors)

    thresholds = config["grading_thresholds"]
    if isinstance(thresholds, dict):
        thresholds = thresholds_from_mapping(thresholds)

    try:
        return GradingSettings.model_validate({
            "subjects": config["subjects"],
            "core_subjects": config["core_subjects"],
            "grading_thresholds": thresholds,
            "fallback_grade": config["fallback_grade"],
            "zero_spread_grade": config["zero_spread_grade"],
            "category_thresholds": config["category_thresholds"],
            "default_category": config["default_category"],
            "normalization": normalization_slots(config["normalization"]),
            "normalization_mode": config["normalization_mode"],
            "sba": config["sba"],
            "use_t_distribution": config["use_t_distribution"],
            "sort_order": config["sort_order"],
            "active_period": config["active_period"],
            "default_facilitator": config["default_facilitator"],
        })
    except ValidationError as e:
        raise GradingConfigError([
            {
                "type": "error",
                "message": f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            }
            for error in e.errors()
        ]) from None
