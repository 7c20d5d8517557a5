"""Cohort statistics for norm-referenced grading."""

import logging
import math
import statistics
from typing import Sequence

from .models import ClassStatistics, GradingSettings, StudentRecord, SubjectStatistics
from .scores import composite_score, resolve_score_set, subject_raw_score

logger = logging.getLogger(__name__)


def calculate_mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def calculate_std_dev(values: Sequence[float], mean: float, use_bessel: bool = False) -> float:
    """
    Standard deviation about a given mean.

    Args:
        values: Sequence of numeric values
        mean: Mean of ``values``
        use_bessel: Divide by n - 1 (sample) instead of n (population)

    Returns:
        The standard deviation, or 0.0 when fewer than 2 values are given.
    """
    n = len(values)
    if n <= 1:
        return 0.0

    squared = math.fsum((value - mean) ** 2 for value in values)
    denominator = n - 1 if use_bessel else n
    return math.sqrt(squared / denominator)


def describe(values: Sequence[float], use_bessel: bool = False) -> tuple[float, float]:
    """Return ``(mean, std_dev)`` of a sequence."""
    mean = calculate_mean(values)
    return mean, calculate_std_dev(values, mean, use_bessel)


def compute_class_statistics(
    students: Sequence[StudentRecord],
    settings: GradingSettings
) -> ClassStatistics:
    """
    Compute per-subject mean and standard deviation over the whole cohort.

    Composite scores and the two raw exam sections are described
    independently of one another. The result is computed once per roster
    and settings snapshot and shared by every student in it.
    """
    score_sets = [resolve_score_set(s, settings.active_period) for s in students]
    subjects = {}

    for subject in settings.subjects:
        composites = []
        section_a = []
        section_b = []

        for score_set in score_sets:
            raw = subject_raw_score(score_set, subject)
            section_a.append(raw.section_a)
            section_b.append(raw.section_b)
            composites.append(composite_score(raw, subject, settings))

        mean, std_dev = describe(composites, settings.use_t_distribution)
        mean_a, std_a = describe(section_a, settings.use_t_distribution)
        mean_b, std_b = describe(section_b, settings.use_t_distribution)

        if std_dev == 0 and composites:
            logger.warning("No spread in %s composite scores; every student gets the default grade", subject)

        subjects[subject] = SubjectStatistics(
            mean=mean,
            std_dev=std_dev,
            section_a_mean=mean_a,
            section_a_std_dev=std_a,
            section_b_mean=mean_b,
            section_b_std_dev=std_b,
        )

    logger.debug(
        "Computed statistics for %d subjects over %d students",
        len(subjects),
        len(score_sets),
    )
    return ClassStatistics(subjects=subjects)
