import json

import pandas as pd
from openpyxl import load_workbook

import generate


def write_roster(path):
    pd.DataFrame({
        "id": [101, 102, 103],
        "name": ["KWAME MENSAH", "ABENA OSEI", "KOFI ADU"],
        "Mathematics A": [40, 30, 20],
        "Mathematics B": [50, 40, 30],
        "Science A": [35, 30, 10],
        "Science B": [45, 20, 15],
    }).to_csv(path, index=False)


def test_main_writes_broadsheet(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_roster(tmp_path / "students.csv")
    (tmp_path / "config.json").write_text(json.dumps({
        "subjects": ["Mathematics", "Science"],
        "sba": {"enabled": False},
        "output_file": "results.xlsx",
    }))
    (tmp_path / "facilitators.json").write_text(json.dumps({"Mathematics": "SIR SAMMY"}))

    assert generate.main() == 0

    ws = load_workbook(tmp_path / "results.xlsx")["Broadsheet"]
    assert ws["C3"].value == "KWAME MENSAH"
    assert ws["A5"].value == 3


def test_main_without_roster(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert generate.main() == 1


def test_main_rejects_invalid_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_roster(tmp_path / "students.csv")
    (tmp_path / "config.json").write_text(json.dumps({"sort_order": "random"}))

    assert generate.main() == 1
    assert not (tmp_path / "broadsheet.xlsx").exists()


def test_main_rejects_negative_scores(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    pd.DataFrame({"id": [1], "name": ["A"], "Mathematics A": [-4]}).to_csv(tmp_path / "students.csv", index=False)

    assert generate.main() == 1


def test_main_rejects_non_numeric_id(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "students.csv").write_text("id,name,Mathematics A,Mathematics B\nS001,A,10,20\n")

    assert generate.main() == 1
    assert not (tmp_path / "broadsheet.xlsx").exists()


def test_main_rejects_incomplete_grade_band(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_roster(tmp_path / "students.csv")
    (tmp_path / "config.json").write_text(json.dumps({
        "grading_thresholds": [{"code": "A1", "z_cutoff": 1.5, "value": 1}],
    }))

    assert generate.main() == 1
