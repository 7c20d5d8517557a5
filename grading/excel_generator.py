"""Excel broadsheet generation for processed results."""

from typing import Sequence
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter
from openpyxl.chart import BarChart, Reference

from .models import ClassStatistics, GradingSettings, ProcessedStudent

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
CORE_FILL = PatternFill(start_color="5B9BD5", end_color="5B9BD5", fill_type="solid")
ELECTIVE_FILL = PatternFill(start_color="70AD47", end_color="70AD47", fill_type="solid")
TOTAL_FILL = PatternFill(start_color="FFE699", end_color="FFE699", fill_type="solid")
AGGREGATE_FILL = PatternFill(start_color="F4B183", end_color="F4B183", fill_type="solid")
CATEGORY_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
CENTER_ALIGN = Alignment(horizontal="center", vertical="center")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin")
)


def col_letter(col_num: int) -> str:
    """Convert 1-based column number to Excel column letter."""
    return get_column_letter(col_num)


def style_cell(cell, font=None, fill=None):
    """Apply the shared alignment and border, plus optional font and fill."""
    cell.alignment = CENTER_ALIGN
    cell.border = THIN_BORDER
    if font is not None:
        cell.font = font
    if fill is not None:
        cell.fill = fill


def create_broadsheet_sheet(
    ws,
    processed: Sequence[ProcessedStudent],
    settings: GradingSettings
):
    """
    Create the broadsheet: one row per student, in the given (rank) order.

    Each subject spans two columns, composite score and grade. Core
    subject headers are blue, electives green.
    """
    # Build column structure
    col_rank, col_id, col_name = 1, 2, 3
    subject_cols = {}
    col = 4
    for subject in settings.subjects:
        subject_cols[subject] = col
        col += 2
    col_total = col
    col_aggregate = col + 1
    col_category = col + 2

    # --- Row 1: Main headers ---
    row = 1

    for c, title in ((col_rank, "Rank"), (col_id, "ID"), (col_name, "Student Name")):
        ws.cell(row=row, column=c, value=title)
        style_cell(ws.cell(row=row, column=c), HEADER_FONT, HEADER_FILL)
        ws.merge_cells(start_row=row, start_column=c, end_row=row + 1, end_column=c)

    for subject, start in subject_cols.items():
        fill = CORE_FILL if subject in settings.core_subjects else ELECTIVE_FILL
        ws.cell(row=row, column=start, value=subject)
        for c in (start, start + 1):
            style_cell(ws.cell(row=row, column=c), HEADER_FONT, fill)
        ws.merge_cells(start_row=row, start_column=start, end_row=row, end_column=start + 1)

    for c, title, fill in (
        (col_total, "Total", TOTAL_FILL),
        (col_aggregate, "Best 6 Aggregate", AGGREGATE_FILL),
        (col_category, "Category", CATEGORY_FILL),
    ):
        ws.cell(row=row, column=c, value=title)
        style_cell(ws.cell(row=row, column=c), Font(bold=True), fill)
        ws.merge_cells(start_row=row, start_column=c, end_row=row + 1, end_column=c)

    # --- Row 2: Score / grade sub-headers ---
    row = 2

    for start in subject_cols.values():
        ws.cell(row=row, column=start, value="Score")
        ws.cell(row=row, column=start + 1, value="Grade")
        style_cell(ws.cell(row=row, column=start), Font(bold=True))
        style_cell(ws.cell(row=row, column=start + 1), Font(bold=True))

    # --- Student rows ---
    for student_idx, student in enumerate(processed):
        row = 3 + student_idx

        ws.cell(row=row, column=col_rank, value=student.rank)
        ws.cell(row=row, column=col_id, value=student.id)
        ws.cell(row=row, column=col_name, value=student.name)
        for c in (col_rank, col_id, col_name):
            style_cell(ws.cell(row=row, column=c))

        for subject in student.subjects:
            start = subject_cols.get(subject.subject)
            if start is None:
                continue
            ws.cell(row=row, column=start, value=round(subject.composite_score, 1))
            ws.cell(row=row, column=start + 1, value=subject.grade)
            style_cell(ws.cell(row=row, column=start))
            style_cell(ws.cell(row=row, column=start + 1))

        ws.cell(row=row, column=col_total, value=round(student.total_score, 1))
        style_cell(ws.cell(row=row, column=col_total), fill=TOTAL_FILL)
        ws.cell(row=row, column=col_aggregate, value=student.best_six_aggregate)
        style_cell(ws.cell(row=row, column=col_aggregate), fill=AGGREGATE_FILL)
        ws.cell(row=row, column=col_category, value=student.category)
        style_cell(ws.cell(row=row, column=col_category), fill=CATEGORY_FILL)

    # Adjust column widths
    ws.column_dimensions[col_letter(col_name)].width = 25
    for start in subject_cols.values():
        ws.column_dimensions[col_letter(start)].width = 12
        ws.column_dimensions[col_letter(start + 1)].width = 8
    ws.column_dimensions[col_letter(col_total)].width = 10
    ws.column_dimensions[col_letter(col_aggregate)].width = 16
    ws.column_dimensions[col_letter(col_category)].width = 14
    ws.freeze_panes = "D3"


def create_statistics_sheet(
    ws,
    stats: ClassStatistics,
    settings: GradingSettings
):
    """Create a sheet of per-subject cohort statistics with a chart of means."""
    headers = [
        "Subject",
        "Mean",
        "Std Dev",
        "Section A Mean",
        "Section A Std Dev",
        "Section B Mean",
        "Section B Std Dev",
    ]
    for col_idx, title in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_idx, value=title)
        style_cell(cell, HEADER_FONT, HEADER_FILL)

    for row_idx, subject in enumerate(settings.subjects, 2):
        s = stats.for_subject(subject)
        values = [
            subject,
            s.mean,
            s.std_dev,
            s.section_a_mean,
            s.section_a_std_dev,
            s.section_b_mean,
            s.section_b_std_dev,
        ]
        for col_idx, value in enumerate(values, 1):
            if isinstance(value, float):
                value = round(value, 2)
            style_cell(ws.cell(row=row_idx, column=col_idx, value=value))

    # Adjust column widths
    for col_idx, title in enumerate(headers, 1):
        ws.column_dimensions[col_letter(col_idx)].width = max(15, len(title) + 2)
    ws.column_dimensions["A"].width = 30

    num_rows = len(settings.subjects) + 1  # +1 for header
    if num_rows > 1:
        chart = BarChart()
        chart.title = "Subject Means"
        chart.style = 10
        chart.x_axis.title = "Subject"
        chart.y_axis.title = "Composite Score"

        data = Reference(ws, min_col=2, min_row=1, max_col=2, max_row=num_rows)
        cats = Reference(ws, min_col=1, min_row=2, max_row=num_rows)
        chart.add_data(data, titles_from_data=True)
        chart.set_categories(cats)
        chart.width = 20
        chart.height = 12

        # Place chart below the data
        ws.add_chart(chart, f"A{num_rows + 3}")


def generate_workbook(
    processed: Sequence[ProcessedStudent],
    stats: ClassStatistics,
    settings: GradingSettings,
    title: str = "Examination Broadsheet"
) -> Workbook:
    """
    Generate the results workbook.

    Args:
        processed: Ranked students from ``process_students``
        stats: Cohort statistics the students were graded against
        settings: Grading settings used for the run
        title: Heading of the legend sheet

    Returns:
        openpyxl Workbook object
    """
    wb = Workbook()

    # Remove default sheet
    wb.remove(wb.active)

    ws_broadsheet = wb.create_sheet(title="Broadsheet")
    create_broadsheet_sheet(ws_broadsheet, processed, settings)

    ws_stats = wb.create_sheet(title="Statistics")
    create_statistics_sheet(ws_stats, stats, settings)

    # Create legend sheet
    ws_info = wb.create_sheet(title="Legend", index=0)
    ws_info["A1"] = title
    ws_info["A1"].font = Font(bold=True, size=16)
    ws_info["A3"] = "Configuration:"
    ws_info["A3"].font = Font(bold=True)

    row = 4
    if settings.active_period:
        ws_info[f"A{row}"] = f"Period: {settings.active_period}"
        row += 1
    ws_info[f"A{row}"] = f"Students: {len(processed)}"
    row += 1
    if settings.sba.enabled:
        ws_info[f"A{row}"] = f"SBA Weight: {settings.sba.sba_weight:g}%  Exam Weight: {settings.sba.exam_weight:g}%"
    else:
        ws_info[f"A{row}"] = "SBA: disabled (exam score only)"
    row += 1
    ws_info[f"A{row}"] = f"Variance: {'sample (n-1)' if settings.use_t_distribution else 'population (n)'}"
    row += 1
    ws_info[f"A{row}"] = f"Core Subjects: {', '.join(s for s in settings.subjects if s in settings.core_subjects)}"
    row += 2

    ws_info[f"A{row}"] = "Grade Bands (z-score cut-offs):"
    ws_info[f"A{row}"].font = Font(bold=True)
    row += 1
    for band in settings.grading_thresholds:
        ws_info[f"A{row}"] = f"  {band.code} ({band.value}, {band.remark}): z >= {band.z_cutoff:g}"
        row += 1
    fallback = settings.fallback_grade
    ws_info[f"A{row}"] = f"  {fallback.code} ({fallback.value}, {fallback.remark}): below all cut-offs"
    row += 2

    if settings.category_thresholds:
        ws_info[f"A{row}"] = "Aggregate Categories:"
        ws_info[f"A{row}"].font = Font(bold=True)
        row += 1
        for category in settings.category_thresholds:
            ws_info[f"A{row}"] = f"  {category.label}: {category.min:g} - {category.max:g}"
            row += 1

    ws_info.column_dimensions["A"].width = 60

    return wb
