"""Common utilities for report generation.

Column layout, value formatting and HTML scaffolding shared by the
table, JSON, HTML and Excel generators.
"""
from __future__ import annotations
import html
from typing import List, Any, Dict
from ..compute.models import ReportRow, PodResourceTotals

HEADERS = [
    'NAMESPACE', 'NAME', 'REPLICAS', 'CPU_REQ(m)', 'CPU_LIMIT(m)',
    'MEM_REQ(Mi)', 'MEM_LIMIT(Mi)', 'HPA_MIN', 'HPA_MAX', 'HPA_TARGET',
]

# Numeric columns are right aligned in file reports (1-based)
NUMERIC_COLUMNS = range(3, 8)

# Table view truncation widths
TRUNCATE = {'NAMESPACE': 16, 'NAME': 32, 'HPA_TARGET': 20}


def fmt_amount(value: float) -> str:
    return f'{value:.0f}'


def trunc(s: str, n: int) -> str:
    if len(s) <= n:
        return s
    return s[:n]


def row_values(row: ReportRow) -> List[Any]:
    return [
        row.namespace, row.name, row.replicas,
        fmt_amount(row.cpu_req_milli), fmt_amount(row.cpu_limit_milli),
        fmt_amount(row.mem_req_mi), fmt_amount(row.mem_limit_mi),
        row.hpa_min, row.hpa_max, row.hpa_target,
    ]


def totals_values(totals: PodResourceTotals, replicas: int) -> List[Any]:
    return [
        'Totals', '', replicas,
        fmt_amount(totals.cpu_request_milli), fmt_amount(totals.cpu_limit_milli),
        fmt_amount(totals.memory_request_mib), fmt_amount(totals.memory_limit_mib),
        '', '', '',
    ]


def build_legend_html(sections: List[Dict[str, Any]]) -> str:
    parts = ['<div class="legend">', '<h3>Legend</h3>']
    for section in sections:
        parts.append('<div class="legend-section">')
        parts.append(f'<h4>{html.escape(section["title"])}</h4>')
        parts.append('<ul>')
        for item in section["items"]:
            parts.append(f'<li>{item}</li>')
        parts.append('</ul>')
        parts.append('</div>')
    parts.append('</div>')
    return '\n'.join(parts)


def get_common_legend_sections() -> List[Dict[str, Any]]:
    return [
        {"title": "Units", "items": [
            "<strong>CPU</strong>: millicores (1000m = 1 core), summed over all replicas",
            "<strong>Memory</strong>: MiB (1024 MiB = 1 GiB), summed over all replicas",
        ]},
        {"title": "HPA", "items": [
            "<strong>HPA_TARGET</strong>: cpu: current/target of the first CPU resource metric",
            "<strong>?</strong>: side not reported yet; <strong>-</strong>: no autoscaler or no CPU metric",
        ]},
    ]


def get_base_css_styles() -> str:
    return """
body { font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif; margin: 20px; color: #212529; line-height: 1.5; }
h1, h2, h3, h4, h5, h6 { color: #343a40; margin-top: 0; margin-bottom: 1rem; }
table { border-collapse: collapse; margin-bottom: 16px; width: 100%; font-size: 13px; }
th { background: #343a40; color: #ffffff; font-weight: 600; text-align: left; border: 1px solid #dee2e6; padding: 8px; vertical-align: top; }
td { border: 1px solid #dee2e6; padding: 8px; vertical-align: top; color: #343a40; }
td.num { text-align: right; }
table tr:nth-child(even) { background-color: #f8f9fa; }
tr.totals-row td { font-weight: 600; background: #dfe; }
.legend { background: #f8f9fa; border: 1px solid #dee2e6; padding: 15px; margin: 15px 0; border-radius: 6px; font-size: 11px; }
.legend h3 { margin: 0 0 10px 0; color: #343a40; font-size: 12px; font-weight: 600; }
.legend h4 { margin: 10px 0 5px 0; color: #495057; font-size: 11px; font-weight: 500; }
.legend ul { margin: 8px 0; padding-left: 24px; }
.legend li { margin: 5px 0; color: #6c757d; }
""".strip()


def wrap_html_document(title: str, content_parts: List[str], additional_css: str = "") -> str:
    base_css = get_base_css_styles()
    full_css = base_css + ("\n" + additional_css if additional_css else "")
    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <style>
{full_css}
  </style>
</head>
<body>
{chr(10).join(content_parts)}
</body>
</html>"""
