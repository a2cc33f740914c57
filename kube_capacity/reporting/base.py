from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type
from ..compute.models import ReportRow


class ReportGenerator(ABC):
    """Abstract base for report generators.

    Stream formats write to ``out_path`` when given and to stdout otherwise;
    file formats (``writes_file``) always need an ``out_path``.
    """

    # Value accepted by --output (e.g. 'table', 'excel')
    format_name: str
    # Default file extension including dot (e.g. '.html', '.xlsx')
    file_extension: str
    # Whether the output is a file rather than terminal text
    writes_file: bool = False
    # Default filename prefix (before timestamp) for auto output naming
    filename_prefix: str = 'deploy-capacity-'

    @abstractmethod
    def generate(self, rows: List[ReportRow], scope, out_path: Optional[str] = None) -> None:  # pragma: no cover - interface
        pass


_registry: Dict[str, Type[ReportGenerator]] = {}


def register(generator_cls: Type[ReportGenerator]):
    name = getattr(generator_cls, 'format_name', None)
    if not name:
        raise ValueError('ReportGenerator subclass must define format_name')
    _registry[name] = generator_cls
    return generator_cls


def get_report_formats():
    return sorted(_registry.keys())


def get_generator(format_name: str) -> ReportGenerator:
    cls = _registry.get(format_name)
    if not cls:
        raise ValueError(f'Unknown output format: {format_name}. Available: {", ".join(get_report_formats())}')
    return cls()
