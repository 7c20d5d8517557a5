"""Best-six aggregate selection and performance categories."""

from typing import Iterable, Sequence

from .models import CategoryThreshold, ComputedSubject

CORE_SLOTS = 4
ELECTIVE_SLOTS = 2


def subject_quality_key(subject: ComputedSubject) -> tuple[int, float]:
    """Sort key: better grade first, then higher composite score."""
    return (subject.grade_value, -subject.composite_score)


def split_core_elective(
    subjects: Iterable[ComputedSubject],
    core_subjects: Iterable[str]
) -> tuple[list[ComputedSubject], list[ComputedSubject]]:
    """Partition subjects into (cores, electives), preserving input order."""
    core_names = set(core_subjects)
    cores = []
    electives = []
    for subject in subjects:
        if subject.subject in core_names:
            cores.append(subject)
        else:
            electives.append(subject)
    return cores, electives


def select_best_subjects(
    subjects: Iterable[ComputedSubject],
    core_subjects: Iterable[str]
) -> tuple[tuple[ComputedSubject, ...], tuple[ComputedSubject, ...]]:
    """
    Pick the best four core and best two elective subjects.

    A smaller group yields fewer picks; nothing is padded.

    Returns:
        Tuple of (best cores, best electives), each ordered best first.
    """
    cores, electives = split_core_elective(subjects, core_subjects)
    best_cores = sorted(cores, key=subject_quality_key)[:CORE_SLOTS]
    best_electives = sorted(electives, key=subject_quality_key)[:ELECTIVE_SLOTS]
    return tuple(best_cores), tuple(best_electives)


def best_six_aggregate(
    best_cores: Sequence[ComputedSubject],
    best_electives: Sequence[ComputedSubject]
) -> int:
    """Sum of grade values of the selected subjects (lower is better)."""
    return sum(s.grade_value for s in best_cores) + sum(s.grade_value for s in best_electives)


def classify_category(
    aggregate: float,
    thresholds: Sequence[CategoryThreshold],
    default: str = "Pass"
) -> str:
    """Label of the first inclusive range containing the aggregate."""
    for threshold in thresholds:
        if threshold.min <= aggregate <= threshold.max:
            return threshold.label
    return default
