"""
Grading pipeline: raw roster records in, graded and ranked students out.

Every function here is pure. Statistics are computed for the whole cohort
first and then read, unchanged, while each student is graded.
"""

import logging
from collections import Counter
from typing import Mapping, Sequence

from .aggregate import CORE_SLOTS, ELECTIVE_SLOTS, best_six_aggregate, classify_category, select_best_subjects
from .class_stats import calculate_mean, compute_class_statistics
from .grades import assign_grade, z_score
from .models import (
    ClassStatistics,
    CohortSummary,
    ComputedSubject,
    GradingSettings,
    ProcessedStudent,
    SeriesRecord,
    StudentRecord,
    SubjectSummary,
)
from .ranking import rank_students
from .scores import composite_score, resolve_score_set, subject_raw_score

logger = logging.getLogger(__name__)

__all__ = [
    "compute_class_statistics",
    "grade_subject",
    "process_student",
    "process_students",
    "process_cohort",
    "build_series_records",
    "summarize_cohort",
]


def grade_subject(
    student: StudentRecord,
    subject: str,
    stats: ClassStatistics,
    facilitators: Mapping[str, str],
    settings: GradingSettings
) -> ComputedSubject:
    """Compute the composite score and grade of one subject for one student."""
    score_set = resolve_score_set(student, settings.active_period)
    raw = subject_raw_score(score_set, subject)
    composite = composite_score(raw, subject, settings)
    subject_stats = stats.for_subject(subject)

    grade = assign_grade(
        composite,
        subject_stats.mean,
        subject_stats.std_dev,
        settings.grading_thresholds,
        fallback=settings.fallback_grade,
        zero_spread=settings.zero_spread_grade,
    )

    return ComputedSubject(
        subject=subject,
        score=raw.exam_total,
        sba_score=raw.sba_score,
        composite_score=composite,
        z_score=z_score(composite, subject_stats.mean, subject_stats.std_dev),
        grade=grade.code,
        grade_value=grade.value,
        remark=grade.remark,
        facilitator=facilitators.get(subject) or settings.default_facilitator,
        section_a=raw.section_a,
        section_b=raw.section_b,
    )


def process_student(
    student: StudentRecord,
    stats: ClassStatistics,
    facilitators: Mapping[str, str],
    settings: GradingSettings
) -> ProcessedStudent:
    """Grade every subject of one student and compute the aggregate (unranked)."""
    score_set = resolve_score_set(student, settings.active_period)
    subjects = tuple(
        grade_subject(student, subject, stats, facilitators, settings)
        for subject in settings.subjects
    )

    best_cores, best_electives = select_best_subjects(subjects, settings.core_subjects)
    if len(best_cores) < CORE_SLOTS or len(best_electives) < ELECTIVE_SLOTS:
        logger.warning(
            "Student %s has %d core and %d elective subjects; aggregate covers only those",
            student.id,
            len(best_cores),
            len(best_electives),
        )
    aggregate = best_six_aggregate(best_cores, best_electives)

    return ProcessedStudent(
        id=student.id,
        name=student.name,
        gender=student.gender,
        attendance=score_set.attendance,
        conduct_remark=score_set.conduct_remark or student.conduct_remark,
        overall_remark=score_set.facilitator_remarks.get("overall", ""),
        subjects=subjects,
        total_score=sum(s.composite_score for s in subjects),
        best_six_aggregate=aggregate,
        best_core_subjects=best_cores,
        best_elective_subjects=best_electives,
        category=classify_category(aggregate, settings.category_thresholds, settings.default_category),
    )


def process_students(
    stats: ClassStatistics,
    students: Sequence[StudentRecord],
    facilitators: Mapping[str, str],
    settings: GradingSettings
) -> list[ProcessedStudent]:
    """
    Grade, aggregate and rank a cohort against precomputed statistics.

    Args:
        stats: Cohort statistics from ``compute_class_statistics``
        students: Roster records
        facilitators: Facilitator name by subject
        settings: Grading settings snapshot

    Returns:
        Processed students sorted by ``settings.sort_order`` with ranks 1..N.
    """
    processed = [process_student(s, stats, facilitators, settings) for s in students]
    ranked = rank_students(processed, settings.sort_order)
    logger.debug("Processed %d students for period %s", len(ranked), settings.active_period)
    return ranked


def process_cohort(
    students: Sequence[StudentRecord],
    facilitators: Mapping[str, str],
    settings: GradingSettings
) -> tuple[ClassStatistics, list[ProcessedStudent]]:
    """Run the full pipeline: statistics first, then every student."""
    stats = compute_class_statistics(students, settings)
    return stats, process_students(stats, students, facilitators, settings)


def build_series_records(
    processed: Sequence[ProcessedStudent],
    students: Sequence[StudentRecord],
    period: str | None,
    date: str
) -> dict[int, SeriesRecord]:
    """
    Snapshot each student's outcome for the period into a history record.

    Returns:
        Mapping of student id to its pending ``SeriesRecord``.
    """
    by_id = {s.id: s for s in students}
    records = {}

    for result in processed:
        student = by_id.get(result.id)
        sub_scores = {}
        if student is not None:
            sub_scores = dict(resolve_score_set(student, period).exam_sub_scores)

        records[result.id] = SeriesRecord(
            student_id=result.id,
            period=period,
            aggregate=result.best_six_aggregate,
            rank=result.rank,
            date=date,
            subject_summary={
                s.subject: SubjectSummary(mean=round(s.composite_score), grade=s.grade)
                for s in result.subjects
            },
            sub_scores=sub_scores,
        )

    return records


def summarize_cohort(
    processed: Sequence[ProcessedStudent],
    stats: ClassStatistics,
    period: str | None = None
) -> CohortSummary:
    """Cohort-level averages, category counts and grade distribution."""
    avg_composite = calculate_mean([
        calculate_mean([s.composite_score for s in p.subjects]) for p in processed
    ])
    avg_aggregate = calculate_mean([p.best_six_aggregate for p in processed])

    if processed:
        avg_objective = calculate_mean([s.section_a_mean for s in stats.subjects.values()])
        avg_theory = calculate_mean([s.section_b_mean for s in stats.subjects.values()])
    else:
        avg_objective = avg_theory = 0.0

    distribution: dict[str, Counter] = {}
    for p in processed:
        for s in p.subjects:
            distribution.setdefault(s.subject, Counter())[s.grade] += 1

    return CohortSummary(
        period=period,
        student_count=len(processed),
        avg_composite=avg_composite,
        avg_aggregate=avg_aggregate,
        avg_objective=avg_objective,
        avg_theory=avg_theory,
        category_counts=dict(Counter(p.category for p in processed)),
        grade_distribution={subject: dict(counts) for subject, counts in distribution.items()},
    )
