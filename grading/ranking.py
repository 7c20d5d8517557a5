"""Ordering processed students and assigning ranks."""

from typing import Callable, Sequence

from .models import ProcessedStudent, SortOrder


def _name_key(student: ProcessedStudent) -> str:
    return student.name.casefold()


SORT_KEYS: dict[SortOrder | None, Callable[[ProcessedStudent], tuple]] = {
    SortOrder.NAME_ASC: lambda s: (_name_key(s), s.id),
    SortOrder.ID_ASC: lambda s: (s.id,),
    SortOrder.SCORE_DESC: lambda s: (-s.total_score, s.id),
    SortOrder.AGGREGATE_ASC: lambda s: (s.best_six_aggregate, -s.total_score, s.id),
    None: lambda s: (-s.total_score, s.id),
}


def sort_students(
    students: Sequence[ProcessedStudent],
    sort_order: SortOrder | str | None = None
) -> list[ProcessedStudent]:
    """
    Sort students by the configured order.

    Without an order, students are sorted by total score, highest first.
    Every order ends with the student id, so equal keys still sort the
    same way on every run.
    """
    if sort_order is not None:
        sort_order = SortOrder(sort_order)

    if sort_order == SortOrder.NAME_DESC:
        # Descending by name, ascending by id
        by_id = sorted(students, key=lambda s: s.id)
        return sorted(by_id, key=_name_key, reverse=True)

    return sorted(students, key=SORT_KEYS[sort_order])


def assign_ranks(students: Sequence[ProcessedStudent]) -> list[ProcessedStudent]:
    """Give each student its 1-based position as rank; ties never share."""
    return [s.model_copy(update={"rank": position}) for position, s in enumerate(students, start=1)]


def rank_students(
    students: Sequence[ProcessedStudent],
    sort_order: SortOrder | str | None = None
) -> list[ProcessedStudent]:
    """Sort, then assign contiguous ranks 1..N."""
    return assign_ranks(sort_students(students, sort_order))
