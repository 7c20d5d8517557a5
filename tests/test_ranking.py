import pytest

from grading.models import ProcessedStudent, SortOrder
from grading.ranking import rank_students, sort_students

STUDENTS = [
    ProcessedStudent(id=3, name="kofi adu", total_score=300, best_six_aggregate=12),
    ProcessedStudent(id=1, name="ABENA OSEI", total_score=420, best_six_aggregate=12),
    ProcessedStudent(id=2, name="Yaw Boateng", total_score=300, best_six_aggregate=9),
    ProcessedStudent(id=4, name="Kofi Adu", total_score=250, best_six_aggregate=30),
]


def ids(students):
    return [s.id for s in students]


@pytest.mark.parametrize("order, expected", [
    ("name-asc", [1, 3, 4, 2]),
    ("name-desc", [2, 3, 4, 1]),
    ("id-asc", [1, 2, 3, 4]),
    ("score-desc", [1, 2, 3, 4]),
    ("aggregate-asc", [2, 1, 3, 4]),
    (None, [1, 2, 3, 4]),
])
def test_sort_orders(order, expected):
    assert ids(sort_students(STUDENTS, order)) == expected


def test_sort_accepts_enum():
    assert ids(sort_students(STUDENTS, SortOrder.AGGREGATE_ASC)) == [2, 1, 3, 4]


def test_aggregate_ties_break_on_total_score():
    ranked = rank_students(STUDENTS, "aggregate-asc")
    assert [(s.id, s.rank) for s in ranked[:3]] == [(2, 1), (1, 2), (3, 3)]


@pytest.mark.parametrize("order", ["name-asc", "name-desc", "id-asc", "score-desc", "aggregate-asc", None])
def test_ranks_are_contiguous(order):
    tied = [ProcessedStudent(id=i, name="SAME", total_score=100, best_six_aggregate=20) for i in range(7)]
    ranked = rank_students(tied, order)

    assert sorted(s.rank for s in ranked) == list(range(1, 8))
    assert [s.rank for s in ranked] == list(range(1, 8))


def test_ranking_does_not_mutate_input():
    rank_students(STUDENTS, "id-asc")
    assert all(s.rank == 0 for s in STUDENTS)


def test_empty_roster():
    assert rank_students([], "aggregate-asc") == []
