#!/usr/bin/env python3
"""
Examination Broadsheet Generator

Reads grading configuration from config.json, the roster from students.csv
(or students.xlsx) and facilitators from facilitators.json, grades and
ranks every student, then writes an Excel broadsheet.

Usage:
    1. Edit config.json to set subjects, grade thresholds, SBA weights, etc.
    2. Put the roster in students.csv: id, name, then "<Subject> A",
       "<Subject> B" and "<Subject> SBA" columns
    3. Optionally map subjects to facilitator names in facilitators.json
    4. Run: python generate.py
"""

import json
import logging
import sys
from pathlib import Path

from grading import (
    GradingConfigError,
    RosterError,
    build_settings,
    generate_workbook,
    merge_config,
    process_cohort,
    read_roster,
    students_from_dataframe,
    summarize_cohort,
    validate_config,
    validate_scores,
    validate_students,
)

ROSTER_FILES = ["students.csv", "students.xlsx"]


def load_config(config_path: str | Path = "config.json") -> dict:
    """Load configuration from JSON file."""
    with open(config_path, "r") as f:
        return json.load(f)


def load_facilitators(path: str | Path = "facilitators.json") -> dict[str, str]:
    """Load subject-to-facilitator names; empty when the file is absent."""
    path = Path(path)
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return json.load(f)


def find_roster() -> Path | None:
    """First roster file present in the working directory."""
    for name in ROSTER_FILES:
        path = Path(name)
        if path.exists():
            return path
    return None


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("📊 Examination Broadsheet Generator")
    print("=" * 40)

    # Load configuration
    config_path = Path("config.json")
    if config_path.exists():
        config = merge_config(load_config(config_path))
        print(f"✓ Loaded configuration from {config_path}")
    else:
        config = merge_config({})
        print("✓ No config.json found, using default configuration")

    for issue in validate_config(config):
        if issue["type"] == "warning":
            print(f"⚠ {issue['message']}")

    try:
        settings = build_settings(config)
    except GradingConfigError as e:
        for issue in e.issues:
            print(f"❌ Error: {issue['message']}")
        return 1

    # Load students
    roster_path = find_roster()
    if roster_path is None:
        print(f"❌ Error: no roster found ({' or '.join(ROSTER_FILES)})!")
        print("   Create a roster with id, name and score columns.")
        return 1

    frame = read_roster(roster_path)
    student_issues = validate_students(frame.to_dict("records"))
    for issue in student_issues:
        if issue["type"] == "error":
            print(f"❌ Error: {issue['message']} in {roster_path}!")
            return 1
        print(f"⚠ {issue['message']}")

    score_issues = validate_scores(frame, config)
    if score_issues:
        for issue in score_issues:
            print(f"❌ Row {issue['row']}, {issue['column']}: {issue['message']}")
        return 1

    try:
        students = students_from_dataframe(frame, settings.subjects, settings.active_period)
    except RosterError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✓ Loaded {len(students)} students from {roster_path}")

    facilitators = load_facilitators()

    # Grade and rank
    print("\n📝 Grading and ranking...")
    stats, processed = process_cohort(students, facilitators, settings)
    summary = summarize_cohort(processed, stats, settings.active_period)

    # Generate workbook
    wb = generate_workbook(processed, stats, settings)
    output_file = config.get("output_file", "broadsheet.xlsx")
    wb.save(output_file)
    print(f"✓ Saved to {output_file}")

    # Summary
    print("\n" + "=" * 40)
    print("📋 Summary:")
    print(f"   Students: {summary.student_count}")
    print(f"   Subjects: {len(settings.subjects)}")
    print(f"   Average composite: {summary.avg_composite:.1f}")
    print(f"   Average aggregate: {summary.avg_aggregate:.1f}")
    for label, count in summary.category_counts.items():
        print(f"   {label}: {count}")

    if processed:
        top = processed[0]
        print(f"\n🎉 Rank 1: {top.name} (aggregate {top.best_six_aggregate})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
