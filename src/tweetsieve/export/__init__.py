from .base import Exporter, replacing
from .csv import CSVExporter
from .jsonl import JSONLExporter

EXPORTERS = {
    'csv': CSVExporter,
    'jsonl': JSONLExporter,
}

__all__ = ['Exporter', 'CSVExporter', 'JSONLExporter', 'EXPORTERS', 'replacing']
