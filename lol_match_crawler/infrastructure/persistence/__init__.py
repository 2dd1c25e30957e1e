"""Infrastructure persistence module."""
from .csv_sink import CsvSampleSink, default_output_path

__all__ = [
    'CsvSampleSink',
    'default_output_path',
]
