"""
Excel export functionality for TripLedger
"""
from __future__ import annotations
from dataclasses import replace
from datetime import date
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Trip
from computations import (
    filter_expenses_by_date,
    compute_summary,
    calculate_settlement,
    category_totals
)
from trips import participant_name


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _money_columns(ws, first_col, last_col):
    for r in range(2, ws.max_row + 1):
        for c in range(first_col, last_col + 1):
            ws.cell(r, c).number_format = "0.00"


def export_excel(
    trip: Trip,
    filepath: str,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> None:
    """
    Export trip to Excel file with sheets:
    - Expenses: one row per expense, one share column per participant
    - Summary: paid, consumed and net per participant
    - Settlement: who pays whom
    - Categories: spending per category, transfers excluded
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    people = trip.participants
    exps = filter_expenses_by_date(trip.expenses, start, end)
    currency = trip.trip_currency

    ws = wb.create_sheet("Expenses")
    headers = ["Date", "Description", "Category", f"Amount ({currency})", "Paid by"]
    headers += [p.name for p in people]
    ws.append(headers)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for e in sorted(exps, key=lambda e: e.date):
        paid_by = ", ".join(participant_name(trip, p.participant_id) for p in e.payers)
        shares = {s.participant_id: s.amount for s in e.splits}
        ws.append([e.date, e.description, e.tag, e.amount, paid_by] + [shares.get(p.id, 0.0) for p in people])
    if ws.max_row >= 2:
        last = ws.max_row
        ws.append(["TOTALS"] + [""] * (len(headers) - 1))
        trow = ws.max_row
        ws.cell(trow, 1).font = Font(bold=True)
        for col in [4] + list(range(6, 6 + len(people))):
            letter = get_column_letter(col)
            ws.cell(trow, col).value = f"=SUM({letter}2:{letter}{last})"
    _money_columns(ws, 4, 4)
    _money_columns(ws, 6, 5 + len(people))
    _autosize_columns(ws)

    ws = wb.create_sheet("Summary")
    summary = compute_summary(trip, start, end)
    ws.append(["Participant", "Paid", "Consumed", "Net (Paid-Consumed)"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for p in people:
        s = summary[p.id]
        ws.append([p.name, s["paid"], s["consumed"], s["net"]])
    _money_columns(ws, 2, 4)
    _autosize_columns(ws)

    ws = wb.create_sheet("Settlement")
    ws.append(["From (Debtor)", "To (Creditor)", f"Amount ({currency})"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    net = {p.id: summary[p.id]["net"] for p in people}
    for t in calculate_settlement(net):
        ws.append([participant_name(trip, t.from_id), participant_name(trip, t.to_id), t.amount])
    _money_columns(ws, 3, 3)
    _autosize_columns(ws)

    ws = wb.create_sheet("Categories")
    ws.append(["Category", f"Total ({currency})"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    filtered = replace(trip, expenses=exps)
    for tag, total in category_totals(filtered):
        ws.append([tag, total])
    _money_columns(ws, 2, 2)
    _autosize_columns(ws)

    wb.save(filepath)
