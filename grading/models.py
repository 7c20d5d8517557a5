"""Data model for raw score records, grading settings and processed results."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FrozenModel(BaseModel):
    """Immutable base; pipeline values are replaced, never mutated."""

    model_config = ConfigDict(frozen=True)


class SortOrder(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    ID_ASC = "id-asc"
    SCORE_DESC = "score-desc"
    AGGREGATE_ASC = "aggregate-asc"


# --- Raw inputs ---


class SectionScores(FrozenModel):
    """Objective (section A) and theory (section B) exam marks."""

    section_a: float = 0.0
    section_b: float = 0.0


class ScoreSet(FrozenModel):
    """Every raw score recorded for one student in one evaluation period."""

    scores: dict[str, float] = Field(default_factory=dict, description="Legacy flat exam totals")
    sba_scores: dict[str, float] = Field(default_factory=dict)
    exam_sub_scores: dict[str, SectionScores] = Field(default_factory=dict)
    facilitator_remarks: dict[str, str] = Field(default_factory=dict)
    attendance: int = 0
    conduct_remark: str = ""


class StudentRecord(FrozenModel):
    """A roster entry: default scores plus optional per-period score sets."""

    id: int
    name: str
    gender: str = ""
    scores: dict[str, float] = Field(default_factory=dict)
    sba_scores: dict[str, float] = Field(default_factory=dict)
    exam_sub_scores: dict[str, SectionScores] = Field(default_factory=dict)
    attendance: int = 0
    conduct_remark: str = ""
    periods: dict[str, ScoreSet] = Field(default_factory=dict)


class SubjectRawScore(FrozenModel):
    """Raw marks of one student in one subject."""

    section_a: float = 0.0
    section_b: float = 0.0
    sba_score: float = 0.0
    legacy_score: float = 0.0

    @property
    def exam_total(self) -> float:
        """
        Resolve the exam total.

        Sections are summed; records migrated from the pre-sectioned scheme
        carry only a flat score, which is used when both sections are 0.
        """
        if self.section_a == 0 and self.section_b == 0 and self.legacy_score > 0:
            return self.legacy_score
        return self.section_a + self.section_b


# --- Settings ---


class NormalizationConfig(FrozenModel):
    enabled: bool = False
    subject: str = "Mathematics"
    max_score: float = 100.0
    is_locked: bool = False


class SBAConfig(FrozenModel):
    enabled: bool = True
    is_locked: bool = False
    sba_weight: float = 30.0
    exam_weight: float = 70.0


class GradeBand(FrozenModel):
    """A grade with its lower z-score cut-off."""

    code: str
    z_cutoff: float
    value: int
    remark: str


class GradeResult(FrozenModel):
    code: str
    value: int
    remark: str


class CategoryThreshold(FrozenModel):
    """Inclusive aggregate range mapped to a performance category."""

    label: str
    min: float
    max: float


class GradingSettings(FrozenModel):
    """Immutable snapshot of every setting the pipeline reads."""

    subjects: tuple[str, ...]
    core_subjects: frozenset[str]
    grading_thresholds: tuple[GradeBand, ...]
    fallback_grade: GradeResult
    zero_spread_grade: GradeResult
    category_thresholds: tuple[CategoryThreshold, ...] = ()
    default_category: str = "Pass"
    normalization: tuple[NormalizationConfig, ...] = ()
    normalization_mode: Literal["single", "per_subject"] = "single"
    sba: SBAConfig = SBAConfig()
    use_t_distribution: bool = False
    sort_order: SortOrder | None = None
    active_period: str | None = None
    default_facilitator: str = "TBA"


# --- Statistics ---


class SubjectStatistics(FrozenModel):
    mean: float = 0.0
    std_dev: float = 0.0
    section_a_mean: float = 0.0
    section_a_std_dev: float = 0.0
    section_b_mean: float = 0.0
    section_b_std_dev: float = 0.0


class ClassStatistics(FrozenModel):
    """Per-subject cohort statistics for one roster and settings snapshot."""

    subjects: dict[str, SubjectStatistics] = Field(default_factory=dict)

    def for_subject(self, subject: str) -> SubjectStatistics:
        """Statistics for a subject; an uncomputed subject has no spread."""
        return self.subjects.get(subject, SubjectStatistics())


# --- Outputs ---


class ComputedSubject(FrozenModel):
    subject: str
    score: float
    sba_score: float
    composite_score: float
    z_score: float
    grade: str
    grade_value: int
    remark: str
    facilitator: str
    section_a: float = 0.0
    section_b: float = 0.0


class ProcessedStudent(FrozenModel):
    id: int
    name: str
    gender: str = ""
    attendance: int = 0
    conduct_remark: str = ""
    overall_remark: str = ""
    subjects: tuple[ComputedSubject, ...] = ()
    total_score: float = 0.0
    best_six_aggregate: int = 0
    best_core_subjects: tuple[ComputedSubject, ...] = ()
    best_elective_subjects: tuple[ComputedSubject, ...] = ()
    category: str = "Pass"
    rank: int = 0


class SubjectSummary(FrozenModel):
    mean: int
    grade: str


class SeriesRecord(FrozenModel):
    """Archived outcome of one evaluation period for one student."""

    student_id: int
    period: str | None
    aggregate: int
    rank: int
    date: str
    review_status: Literal["pending", "complete"] = "pending"
    is_approved: bool = True
    subject_summary: dict[str, SubjectSummary] = Field(default_factory=dict)
    sub_scores: dict[str, SectionScores] = Field(default_factory=dict)


class CohortSummary(FrozenModel):
    period: str | None
    student_count: int
    avg_composite: float
    avg_aggregate: float
    avg_objective: float
    avg_theory: float
    category_counts: dict[str, int] = Field(default_factory=dict)
    grade_distribution: dict[str, dict[str, int]] = Field(default_factory=dict)
