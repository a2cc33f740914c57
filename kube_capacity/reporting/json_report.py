from __future__ import annotations
import json
from typing import List, Optional
import click
from .base import ReportGenerator, register
from ..compute.models import ReportRow


def render_json(rows: List[ReportRow]) -> str:
    return json.dumps([r.to_dict() for r in rows], indent=2)


@register
class JsonReport(ReportGenerator):
    format_name = 'json'
    file_extension = '.json'

    def generate(self, rows: List[ReportRow], scope, out_path: Optional[str] = None) -> None:
        text = render_json(rows)
        if out_path:
            with open(out_path, 'w', encoding='utf-8') as f:
                f.write(text + '\n')
        else:
            click.echo(text)
