import math

import pytest

from grading import build_settings, compute_class_statistics
from grading.class_stats import calculate_mean, calculate_std_dev
from grading.models import ClassStatistics, ScoreSet, SectionScores

from conftest import make_student


def test_mean_of_empty_is_zero():
    assert calculate_mean([]) == 0


def test_population_std_dev():
    assert calculate_std_dev([50, 70, 90], 70) == pytest.approx(math.sqrt(800 / 3))


def test_sample_std_dev():
    assert calculate_std_dev([50, 70, 90], 70, use_bessel=True) == pytest.approx(20)


@pytest.mark.parametrize("values", [[], [42]])
def test_std_dev_needs_two_values(values):
    assert calculate_std_dev(values, calculate_mean(values), use_bessel=True) == 0


def test_class_statistics_for_composites_and_sections():
    settings = build_settings({"subjects": ["Mathematics"], "core_subjects": ["Mathematics"], "sba": {"enabled": False}})
    students = [
        make_student(1, "A", {"Mathematics": (20, 30)}),
        make_student(2, "B", {"Mathematics": (30, 40)}),
        make_student(3, "C", {"Mathematics": (40, 50)}),
    ]

    stats = compute_class_statistics(students, settings).for_subject("Mathematics")

    assert stats.mean == pytest.approx(70)
    assert stats.std_dev == pytest.approx(16.3299, abs=1e-4)
    assert stats.section_a_mean == pytest.approx(30)
    assert stats.section_b_mean == pytest.approx(40)
    assert stats.section_a_std_dev == pytest.approx(math.sqrt(200 / 3))


def test_class_statistics_respects_t_distribution_flag():
    settings = build_settings({
        "subjects": ["Mathematics"],
        "core_subjects": ["Mathematics"],
        "sba": {"enabled": False},
        "use_t_distribution": True,
    })
    students = [make_student(i, str(i), {"Mathematics": (score, 0)}) for i, score in enumerate([50, 70, 90])]

    assert compute_class_statistics(students, settings).for_subject("Mathematics").std_dev == pytest.approx(20)


def test_class_statistics_uses_active_period():
    settings = build_settings({"subjects": ["Mathematics"], "sba": {"enabled": False}, "active_period": "MOCK 1"})
    mock = ScoreSet(exam_sub_scores={"Mathematics": SectionScores(section_a=10, section_b=10)})
    students = [
        make_student(1, "A", {"Mathematics": (40, 40)}, periods={"MOCK 1": mock}),
        make_student(2, "B", {"Mathematics": (40, 40)}),
    ]

    assert compute_class_statistics(students, settings).for_subject("Mathematics").mean == pytest.approx(50)


def test_identical_scores_have_no_spread(cohort, settings):
    same = [make_student(s.id, s.name, {"Mathematics": (30, 30)}) for s in cohort]
    stats = compute_class_statistics(same, settings)

    assert stats.for_subject("Mathematics").std_dev == 0
    # Nobody has Science marks at all
    assert stats.for_subject("Science").mean == 0


def test_empty_roster(settings):
    stats = compute_class_statistics([], settings)
    assert stats.for_subject("Mathematics").mean == 0
    assert stats.for_subject("Mathematics").std_dev == 0


def test_unknown_subject_has_no_spread():
    assert ClassStatistics().for_subject("Latin").std_dev == 0
