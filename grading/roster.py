"""Tabular adapters between pandas DataFrames and roster/result models."""

from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from .models import ProcessedStudent, ScoreSet, SectionScores, StudentRecord

REQUIRED_COLUMNS = ["id", "name"]


class RosterError(ValueError):
    """Raised when a roster table cannot be read."""


def _number(row: pd.Series, column: str, idx: Any) -> float:
    """Cell value as a float; blanks and absent columns count as 0."""
    value = row.get(column)
    if pd.isna(value) or value == "":
        return 0.0
    try:
        return float(value)
    except (ValueError, TypeError):
        raise RosterError(f"Row {idx}, {column}: invalid score value: {value}") from None


def _student_id(row: pd.Series, idx: Any) -> int:
    """Student id cell as an int."""
    value = row["id"]
    try:
        return int(value)
    except (ValueError, TypeError):
        raise RosterError(f"Row {idx}, id: invalid student id: {value}") from None


def read_roster(path: str | Path) -> pd.DataFrame:
    """Load a roster table from CSV or Excel."""
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xlsm"):
        return pd.read_excel(path)
    return pd.read_csv(path)


def students_from_dataframe(
    frame: pd.DataFrame,
    subjects: Sequence[str],
    period: str | None = None
) -> list[StudentRecord]:
    """
    Build student records from a wide roster table.

    Expected columns: ``id``, ``name`` and optionally ``gender``,
    ``attendance``, ``conduct_remark``, then ``<subject> A``,
    ``<subject> B`` and ``<subject> SBA`` per subject. A ``<subject>``
    column on its own is read as a legacy flat exam total.

    When ``period`` is given the scores are stored as that period's score
    set; otherwise they become the student's default record.

    Raises:
        RosterError: If a required column is missing, or an id or score
            cell is not a number
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise RosterError(f"Roster is missing columns: {', '.join(missing)}")

    students = []
    for idx, row in frame.iterrows():
        student_id = _student_id(row, idx)
        scores = {}
        sba_scores = {}
        sub_scores = {}

        for subject in subjects:
            if f"{subject} A" in row or f"{subject} B" in row:
                sub_scores[subject] = SectionScores(
                    section_a=_number(row, f"{subject} A", idx),
                    section_b=_number(row, f"{subject} B", idx),
                )
            if f"{subject} SBA" in row:
                sba_scores[subject] = _number(row, f"{subject} SBA", idx)
            if subject in row:
                scores[subject] = _number(row, subject, idx)

        attendance = int(_number(row, "attendance", idx))
        conduct = row.get("conduct_remark", "")
        conduct = "" if pd.isna(conduct) else str(conduct)
        gender = row.get("gender", "")
        gender = "" if pd.isna(gender) else str(gender)

        score_set = ScoreSet(
            scores=scores,
            sba_scores=sba_scores,
            exam_sub_scores=sub_scores,
            attendance=attendance,
            conduct_remark=conduct,
        )

        if period is None:
            student = StudentRecord(
                id=student_id,
                name=str(row["name"]).strip(),
                gender=gender,
                scores=scores,
                sba_scores=sba_scores,
                exam_sub_scores=sub_scores,
                attendance=attendance,
                conduct_remark=conduct,
            )
        else:
            student = StudentRecord(
                id=student_id,
                name=str(row["name"]).strip(),
                gender=gender,
                periods={period: score_set},
            )
        students.append(student)

    return students


def results_to_dataframe(processed: Sequence[ProcessedStudent]) -> pd.DataFrame:
    """
    Flatten processed students into a broadsheet table.

    One row per student in the given order, with a composite score and a
    grade column per subject.
    """
    rows = []
    for student in processed:
        row: dict[str, Any] = {
            "Rank": student.rank,
            "ID": student.id,
            "Name": student.name,
        }
        for subject in student.subjects:
            row[subject.subject] = round(subject.composite_score, 1)
            row[f"{subject.subject} Grade"] = subject.grade
        row["Total"] = round(student.total_score, 1)
        row["Aggregate"] = student.best_six_aggregate
        row["Category"] = student.category
        rows.append(row)

    return pd.DataFrame(rows)
