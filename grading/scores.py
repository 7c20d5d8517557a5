"""Resolving raw scores and turning them into composite subject scores."""

from .models import (
    GradingSettings,
    NormalizationConfig,
    SBAConfig,
    ScoreSet,
    SectionScores,
    StudentRecord,
    SubjectRawScore,
)


def resolve_score_set(student: StudentRecord, period: str | None) -> ScoreSet:
    """
    Return the score set a student has for an evaluation period.

    Falls back to the student's default record when no period-specific
    score set exists.
    """
    if period is not None and period in student.periods:
        return student.periods[period]

    return ScoreSet(
        scores=student.scores,
        sba_scores=student.sba_scores,
        exam_sub_scores=student.exam_sub_scores,
        attendance=student.attendance,
        conduct_remark=student.conduct_remark,
    )


def subject_raw_score(score_set: ScoreSet, subject: str) -> SubjectRawScore:
    """Collect the raw marks for one subject, missing values being 0."""
    sections = score_set.exam_sub_scores.get(subject, SectionScores())
    return SubjectRawScore(
        section_a=sections.section_a,
        section_b=sections.section_b,
        sba_score=score_set.sba_scores.get(subject, 0.0),
        legacy_score=score_set.scores.get(subject, 0.0),
    )


def resolve_normalization(subject: str, settings: GradingSettings) -> NormalizationConfig | None:
    """
    Find the normalization slot that applies to a subject.

    In "single" mode only the first configured slot is honored; in
    "per_subject" mode every slot targets its own subject.
    """
    if not settings.normalization:
        return None

    if settings.normalization_mode == "single":
        slot = settings.normalization[0]
        return slot if slot.subject == subject else None

    for slot in settings.normalization:
        if slot.enabled and slot.subject == subject:
            return slot
    return None


def normalize_score(raw: float, subject: str, config: NormalizationConfig | None) -> float:
    """Rescale a raw exam total to 0-100 when the subject is flagged."""
    if config is None:
        return raw
    if config.enabled and subject == config.subject and config.max_score > 0:
        return (raw / config.max_score) * 100
    return raw


def blend_composite(exam_normalized: float, sba_score: float, config: SBAConfig) -> float:
    """
    Blend exam and SBA scores by their percentage weights.

    Weights are applied as given, even when they do not sum to 100.
    """
    if not config.enabled:
        return exam_normalized
    return sba_score * (config.sba_weight / 100) + exam_normalized * (config.exam_weight / 100)


def composite_score(raw: SubjectRawScore, subject: str, settings: GradingSettings) -> float:
    """Composite score of one subject: resolve, normalize, then blend."""
    normalized = normalize_score(raw.exam_total, subject, resolve_normalization(subject, settings))
    return blend_composite(normalized, raw.sba_score, settings.sba)
