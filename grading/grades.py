"""Z-score grade banding."""

from typing import Sequence

from .models import GradeBand, GradeResult

FALLBACK_GRADE = GradeResult(code="F9", value=9, remark="Fail")
ZERO_SPREAD_GRADE = GradeResult(code="C4", value=4, remark="Credit")


def z_score(score: float, mean: float, std_dev: float) -> float:
    """Distance from the mean in standard deviations; 0.0 without spread."""
    if std_dev == 0:
        return 0.0
    return (score - mean) / std_dev


def assign_grade(
    score: float,
    mean: float,
    std_dev: float,
    thresholds: Sequence[GradeBand],
    fallback: GradeResult = FALLBACK_GRADE,
    zero_spread: GradeResult = ZERO_SPREAD_GRADE,
) -> GradeResult:
    """
    Map a composite score to a grade band.

    Bands are tested in the given order (best first); the first band whose
    cut-off the z-score meets or exceeds wins. A cohort without spread
    gets ``zero_spread`` for everyone, and a z-score below every cut-off
    gets ``fallback``.
    """
    if std_dev == 0:
        return zero_spread

    z = (score - mean) / std_dev
    for band in thresholds:
        if z >= band.z_cutoff:
            return GradeResult(code=band.code, value=band.value, remark=band.remark)

    return fallback
