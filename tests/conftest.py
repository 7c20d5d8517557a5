import pytest

from grading import build_settings
from grading.models import SectionScores, StudentRecord

SUBJECTS = [
    "English Language",
    "Mathematics",
    "Science",
    "Social Studies",
    "Computing",
    "French",
]


def make_student(student_id, name, sections, sba=None, **kwargs):
    """Student whose default record holds the given (A, B) sections per subject."""
    return StudentRecord(
        id=student_id,
        name=name,
        exam_sub_scores={
            subject: SectionScores(section_a=a, section_b=b)
            for subject, (a, b) in sections.items()
        },
        sba_scores=sba or {},
        **kwargs,
    )


@pytest.fixture
def settings():
    return build_settings({
        "subjects": SUBJECTS,
        "sba": {"enabled": False},
        "sort_order": "aggregate-asc",
    })


@pytest.fixture
def cohort():
    # Stronger students score higher in every subject
    return [
        make_student(101, "KWAME MENSAH", {s: (40, 50) for s in SUBJECTS}),
        make_student(102, "ABENA OSEI", {s: (30, 40) for s in SUBJECTS}),
        make_student(103, "KOFI ADU", {s: (20, 30) for s in SUBJECTS}),
        make_student(104, "AKOSUA SERWAA", {s: (15, 20) for s in SUBJECTS}),
        make_student(105, "YAW BOATENG", {s: (5, 10) for s in SUBJECTS}),
    ]
