from __future__ import annotations
from typing import List, Optional
import click
from tabulate import tabulate
from .base import ReportGenerator, register
from .common import HEADERS, TRUNCATE, row_values, trunc
from ..compute.models import ReportRow


def render_table(rows: List[ReportRow], scope) -> str:
    table = []
    for r in rows:
        values = row_values(r)
        for col, width in TRUNCATE.items():
            idx = HEADERS.index(col)
            values[idx] = trunc(str(values[idx]), width)
        table.append(values)
    body = tabulate(table, headers=HEADERS, tablefmt='plain', disable_numparse=True)
    return f'Scope: {scope.label()}\n\n{body}'


@register
class TableReport(ReportGenerator):
    format_name = 'table'
    file_extension = '.txt'

    def generate(self, rows: List[ReportRow], scope, out_path: Optional[str] = None) -> None:
        text = render_table(rows, scope)
        if out_path:
            with open(out_path, 'w', encoding='utf-8') as f:
                f.write(text + '\n')
        else:
            click.echo(text)
