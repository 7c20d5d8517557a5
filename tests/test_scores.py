import pytest

from grading import build_settings
from grading.models import NormalizationConfig, SBAConfig, ScoreSet, SectionScores, StudentRecord, SubjectRawScore
from grading.scores import (
    blend_composite,
    composite_score,
    normalize_score,
    resolve_normalization,
    resolve_score_set,
    subject_raw_score,
)


def test_exam_total_sums_sections():
    raw = SubjectRawScore(section_a=30, section_b=40, legacy_score=99)
    assert raw.exam_total == 70


def test_exam_total_uses_legacy_score_when_sections_empty():
    raw = SubjectRawScore(legacy_score=64)
    assert raw.exam_total == 64


def test_exam_total_ignores_non_positive_legacy_score():
    assert SubjectRawScore(legacy_score=0).exam_total == 0
    assert SubjectRawScore(legacy_score=-5).exam_total == 0


def test_missing_subject_scores_default_to_zero():
    raw = subject_raw_score(ScoreSet(), "Mathematics")
    assert (raw.section_a, raw.section_b, raw.sba_score, raw.legacy_score) == (0, 0, 0, 0)


def test_resolve_score_set_prefers_period_record():
    period_set = ScoreSet(sba_scores={"Mathematics": 25}, attendance=58)
    student = StudentRecord(id=1, name="A", sba_scores={"Mathematics": 10}, periods={"MOCK 1": period_set})

    assert resolve_score_set(student, "MOCK 1") is period_set


def test_resolve_score_set_falls_back_to_default_record():
    student = StudentRecord(
        id=1,
        name="A",
        sba_scores={"Mathematics": 10},
        exam_sub_scores={"Mathematics": SectionScores(section_a=5, section_b=6)},
        attendance=40,
        conduct_remark="Punctual",
    )

    resolved = resolve_score_set(student, "MOCK 2")
    assert resolved.sba_scores == {"Mathematics": 10}
    assert resolved.exam_sub_scores["Mathematics"].section_b == 6
    assert resolved.attendance == 40
    assert resolved.conduct_remark == "Punctual"
    assert resolve_score_set(student, None).attendance == 40


def test_normalize_score_rescales_target_subject():
    config = NormalizationConfig(enabled=True, subject="Mathematics", max_score=80)
    assert normalize_score(60, "Mathematics", config) == pytest.approx(75)


@pytest.mark.parametrize("config, subject", [
    (NormalizationConfig(enabled=False, subject="Mathematics", max_score=80), "Mathematics"),
    (NormalizationConfig(enabled=True, subject="Science", max_score=80), "Mathematics"),
    (NormalizationConfig(enabled=True, subject="Mathematics", max_score=0), "Mathematics"),
    (None, "Mathematics"),
])
def test_normalize_score_passes_through(config, subject):
    assert normalize_score(60, subject, config) == 60


def test_blend_disabled_returns_exam_score():
    assert blend_composite(80, 20, SBAConfig(enabled=False, sba_weight=30, exam_weight=70)) == 80


def test_blend_applies_weights():
    assert blend_composite(80, 20, SBAConfig(enabled=True, sba_weight=30, exam_weight=70)) == pytest.approx(62)


def test_blend_does_not_normalize_weights():
    config = SBAConfig(enabled=True, sba_weight=50, exam_weight=100)
    assert blend_composite(80, 20, config) == pytest.approx(90)


def test_composite_straight_sum_without_sba_or_normalization():
    settings = build_settings({"sba": {"enabled": False}})
    raw = SubjectRawScore(section_a=30, section_b=40, sba_score=25)
    assert composite_score(raw, "Mathematics", settings) == 70


def test_composite_normalizes_then_blends():
    settings = build_settings({
        "normalization": {"enabled": True, "subject": "Mathematics", "max_score": 50},
        "sba": {"enabled": True, "sba_weight": 30, "exam_weight": 70},
    })
    raw = SubjectRawScore(section_a=20, section_b=20, sba_score=20)
    # 40 / 50 -> 80, then 20 * 0.3 + 80 * 0.7
    assert composite_score(raw, "Mathematics", settings) == pytest.approx(62)
    assert composite_score(raw, "Science", settings) == pytest.approx(34)


def test_single_mode_honors_only_first_slot():
    settings = build_settings({
        "normalization": [
            {"enabled": True, "subject": "Mathematics", "max_score": 50},
            {"enabled": True, "subject": "Science", "max_score": 50},
        ],
    })
    assert resolve_normalization("Mathematics", settings).max_score == 50
    assert resolve_normalization("Science", settings) is None


def test_per_subject_mode_honors_every_enabled_slot():
    settings = build_settings({
        "normalization": [
            {"enabled": True, "subject": "Mathematics", "max_score": 50},
            {"enabled": True, "subject": "Science", "max_score": 40},
            {"enabled": False, "subject": "French", "max_score": 20},
        ],
        "normalization_mode": "per_subject",
    })
    assert resolve_normalization("Science", settings).max_score == 40
    assert resolve_normalization("French", settings) is None
    assert resolve_normalization("Computing", settings) is None
