from io import BytesIO
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter


def _create_styles():
    """Create reusable style definitions."""
    thin_border = Side(style="thin", color="000000")
    return {
        "title_font": Font(bold=True, size=14),
        "section_font": Font(bold=True, size=11),
        "header_font": Font(bold=True, size=10),
        "header_fill": PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid"),
        "warning_fill": PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
        "subtotal_font": Font(bold=True),
        "border": Border(left=thin_border, right=thin_border, top=thin_border, bottom=thin_border),
        "center_align": Alignment(horizontal="center", vertical="center"),
        "right_align": Alignment(horizontal="right", vertical="center"),
        "left_align": Alignment(horizontal="left", vertical="center"),
    }


def _apply_header_row(ws, row: int, columns: List[str], styles: dict):
    for col_idx, col_name in enumerate(columns, start=1):
        cell = ws.cell(row=row, column=col_idx, value=col_name)
        cell.font = styles["header_font"]
        cell.fill = styles["header_fill"]
        cell.border = styles["border"]
        cell.alignment = styles["center_align"]


def _apply_data_row(ws, row: int, values: List[Any], styles: dict, alignments: List[str] = None):
    for col_idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row, column=col_idx, value=value)
        cell.border = styles["border"]
        if alignments and col_idx <= len(alignments):
            align_type = alignments[col_idx - 1]
            cell.alignment = styles.get(f"{align_type}_align", styles["left_align"])


def _set_column_widths(ws, widths: List[int]):
    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _format_money(value: float, currency: str) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f} {currency}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_summary_excel(report_data: Dict[str, Any]) -> BytesIO:
    """Generate a formatted profit report from summary totals and order lines."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"
    styles = _create_styles()

    summary = report_data.get("summary", {})
    orders = report_data.get("orders", [])
    currency = report_data.get("currency", "EUR")

    current_row = 1

    ws.cell(row=current_row, column=1, value="SALES & PROFIT REPORT").font = styles["title_font"]
    ws.merge_cells(start_row=current_row, start_column=1, end_row=current_row, end_column=8)
    current_row += 1
    ws.cell(row=current_row, column=1, value=f"Generated: {report_data.get('generated_on', '-')}")
    current_row += 2

    # Totals
    ws.cell(row=current_row, column=1, value="TOTALS").font = styles["section_font"]
    current_row += 1
    summary_rows = [
        ("Orders:", summary.get("total_orders", 0)),
        ("Items sold:", summary.get("total_items_sold", 0)),
        ("Revenue:", _format_money(summary.get("total_revenue", 0), currency)),
        ("Material cost:", _format_money(summary.get("total_material_cost", 0), currency)),
        ("Electricity cost:", _format_money(summary.get("total_electricity_cost", 0), currency)),
        ("Labor cost:", _format_money(summary.get("total_labor_cost", 0), currency)),
        ("Labor hours:", f"{summary.get('total_labor_hours', 0):,.2f} h"),
        ("Profit (excluding labor):", _format_money(summary.get("profit_excluding_labor", 0), currency)),
        ("Profit (including labor):", _format_money(summary.get("profit_including_labor", 0), currency)),
    ]
    for label, value in summary_rows:
        ws.cell(row=current_row, column=1, value=label).font = Font(bold=True)
        ws.cell(row=current_row, column=2, value=value)
        current_row += 1

    current_row += 1

    # Order lines
    ws.cell(row=current_row, column=1, value="ORDERS").font = styles["section_font"]
    current_row += 1

    if not orders:
        ws.cell(row=current_row, column=1, value="No orders recorded")
        current_row += 1
    else:
        columns = ["#", "Date", "Item", "Qty", "Unit Price", "Total", "Profit (w/ labor)", "Profit (no labor)", "Paid", "Delivered"]
        _apply_header_row(ws, current_row, columns, styles)
        current_row += 1

        alignments = ["center", "center", "left", "center", "right", "right", "right", "right", "center", "center"]
        for line in orders:
            sale_date = line.get("sale_date")
            row_values = [
                line.get("order_id", "-"),
                sale_date.isoformat() if sale_date else "-",
                line.get("item_name", "-"),
                line.get("quantity", 0),
                _format_money(line.get("sale_price"), currency),
                _format_money(line.get("total_paid"), currency),
                _format_money(line.get("profit_with_labor"), currency),
                _format_money(line.get("profit_without_labor"), currency),
                _yes_no(line.get("paid")),
                _yes_no(line.get("delivered")),
            ]
            _apply_data_row(ws, current_row, row_values, styles, alignments)
            if not line.get("paid"):
                ws.cell(row=current_row, column=9).fill = styles["warning_fill"]
            current_row += 1

        subtotal_values = [
            "TOTAL",
            "",
            "",
            summary.get("total_items_sold", 0),
            "",
            _format_money(summary.get("total_revenue", 0), currency),
            _format_money(summary.get("profit_including_labor", 0), currency),
            _format_money(summary.get("profit_excluding_labor", 0), currency),
            "",
            "",
        ]
        _apply_data_row(ws, current_row, subtotal_values, styles, alignments)
        for col in range(1, len(columns) + 1):
            ws.cell(row=current_row, column=col).font = styles["subtotal_font"]

    _set_column_widths(ws, [26, 18, 25, 8, 14, 14, 18, 18, 8, 10])

    stream = BytesIO()
    wb.save(stream)
    stream.seek(0)
    return stream
