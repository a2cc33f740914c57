from __future__ import annotations
import html
from datetime import datetime, timezone
from typing import List, Optional
from .base import ReportGenerator, register
from .common import (
    HEADERS, NUMERIC_COLUMNS, row_values, totals_values,
    build_legend_html, get_common_legend_sections, wrap_html_document,
)
from ..compute.models import ReportRow
from ..compute.rows import compute_report_totals


def _row_html(values, css_class: str = '') -> str:
    cells = []
    for col, value in enumerate(values, 1):
        cls = ' class="num"' if col in NUMERIC_COLUMNS else ''
        cells.append(f'<td{cls}>{html.escape(str(value))}</td>')
    row_cls = f' class="{css_class}"' if css_class else ''
    return f'<tr{row_cls}>' + ''.join(cells) + '</tr>'


@register
class HtmlReport(ReportGenerator):
    format_name = 'html'
    file_extension = '.html'
    writes_file = True

    def build(self, rows: List[ReportRow], scope) -> str:
        title = 'Deployment Capacity Report'
        generated = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        parts = [
            f'<h1>{html.escape(title)}</h1>',
            f'<p><strong>Scope:</strong> {html.escape(scope.label())}<br/>'
            f'<strong>Generated:</strong> {generated}<br/>'
            f'<strong>Deployments:</strong> {len(rows)}</p>',
            '<table>',
            '<tr>' + ''.join(f'<th>{html.escape(h)}</th>' for h in HEADERS) + '</tr>',
        ]
        for r in rows:
            parts.append(_row_html(row_values(r)))
        totals = compute_report_totals(rows)
        parts.append(_row_html(totals_values(totals, sum(r.replicas for r in rows)), 'totals-row'))
        parts.append('</table>')
        parts.append(build_legend_html(get_common_legend_sections()))
        return wrap_html_document(title, parts)

    def generate(self, rows: List[ReportRow], scope, out_path: Optional[str] = None) -> None:
        if not out_path:
            raise ValueError('HTML report requires an output path')
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(self.build(rows, scope))
