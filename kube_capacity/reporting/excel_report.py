from __future__ import annotations
from typing import List, Optional
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side, Alignment
from openpyxl.utils import get_column_letter
from .base import ReportGenerator, register
from .common import HEADERS, NUMERIC_COLUMNS
from ..compute.models import ReportRow
from ..compute.rows import compute_report_totals

SHEET_TITLE = 'Deployment Capacity'


@register
class ExcelReport(ReportGenerator):
    format_name = 'excel'
    file_extension = '.xlsx'
    writes_file = True

    def generate(self, rows: List[ReportRow], scope, out_path: Optional[str] = None) -> None:
        if not out_path:
            raise ValueError('Excel report requires an output path')
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        totals_fill = PatternFill(start_color="DDFFEE", end_color="DDFFEE", fill_type="solid")
        border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        last_col = get_column_letter(len(HEADERS))
        ws.merge_cells(f'A1:{last_col}1')
        title_cell = ws['A1']
        title_cell.value = 'Deployment Capacity Report'
        title_cell.font = Font(bold=True, size=16)
        title_cell.alignment = Alignment(horizontal='center')
        ws['A2'] = f'Scope: {scope.label()}'

        for col_num, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=3, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = border
            cell.alignment = Alignment(horizontal='center')

        current_row = 4
        for r in rows:
            values = [
                r.namespace, r.name, r.replicas,
                round(r.cpu_req_milli), round(r.cpu_limit_milli),
                round(r.mem_req_mi), round(r.mem_limit_mi),
                r.hpa_min, r.hpa_max, r.hpa_target,
            ]
            for col_num, value in enumerate(values, 1):
                cell = ws.cell(row=current_row, column=col_num, value=value)
                cell.border = border
                if col_num in NUMERIC_COLUMNS:
                    cell.alignment = Alignment(horizontal='right')
            current_row += 1

        totals = compute_report_totals(rows)
        totals_values = [
            'Totals', '', sum(r.replicas for r in rows),
            round(totals.cpu_request_milli), round(totals.cpu_limit_milli),
            round(totals.memory_request_mib), round(totals.memory_limit_mib),
        ]
        for col_num in range(1, len(HEADERS) + 1):
            value = totals_values[col_num - 1] if col_num <= len(totals_values) else None
            cell = ws.cell(row=current_row, column=col_num, value=value)
            cell.font = Font(bold=True)
            cell.fill = totals_fill
            cell.border = border
            if col_num in NUMERIC_COLUMNS:
                cell.alignment = Alignment(horizontal='right')

        widths = [18, 34, 10, 12, 13, 13, 14, 9, 9, 22]
        for col_num, width in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(col_num)].width = width
        ws.freeze_panes = 'A4'
        wb.save(out_path)
        wb.close()
