# Path: org_flow/loaders/unit_file_reader.py
"""
Unit File Reader for org_flow

Reads delimited text exports (CSV, TSV, semicolon or pipe separated) of
organizational units into raw row dictionaries.

RESPONSIBILITY: Turn a file into rows. Header names are kept exactly as
written; the record normalizer and the unit store match them later.
"""

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from constants import CSV_DELIMITERS, CSV_SNIFF_BYTES
from core.logger import get_input_logger


logger = get_input_logger('unit_file_reader')


@dataclass
class ReadStats:
    """Counts from the last read."""
    rows: int = 0
    blank_rows: int = 0
    delimiter: str = ','


class UnitFileReader:
    """
    Reads organizational unit exports.

    Example:
        reader = UnitFileReader()
        rows = reader.read(Path('units.csv'))
        forest = HierarchyBuilder().build_from_rows(rows, first_row_number=2)
    """

    def __init__(self, delimiter: Optional[str] = None, encoding: str = 'utf-8-sig'):
        """
        Initialize reader.

        Args:
            delimiter: Field delimiter; sniffed from the file when None
            encoding: File encoding (BOM-tolerant UTF-8 by default)
        """
        self.delimiter = delimiter
        self.encoding = encoding
        self.last_stats = ReadStats()

    def read(self, path: Path) -> list[dict[str, str]]:
        """
        Read all non-blank rows.

        Args:
            path: Export file

        Returns:
            Row dictionaries keyed by header text

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Unit export not found: {path}")

        stats = ReadStats()
        rows: list[dict[str, str]] = []

        with open(path, 'r', encoding=self.encoding, newline='') as f:
            sample = f.read(CSV_SNIFF_BYTES)
            f.seek(0)
            stats.delimiter = self.delimiter or self._sniff_delimiter(sample)

            reader = csv.DictReader(f, delimiter=stats.delimiter)
            for raw in reader:
                row = {
                    key.strip(): (value or '')
                    for key, value in raw.items()
                    if key is not None and key.strip()
                }
                if not any(value.strip() for value in row.values()):
                    stats.blank_rows += 1
                    continue
                rows.append(row)

        stats.rows = len(rows)
        self.last_stats = stats
        logger.info(
            f"Read {stats.rows} rows from {path.name} "
            f"(delimiter {stats.delimiter!r}, {stats.blank_rows} blank rows skipped)"
        )
        return rows

    @staticmethod
    def _sniff_delimiter(sample: str) -> str:
        if not sample:
            return ','
        try:
            return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
        except csv.Error:
            logger.debug("Could not sniff delimiter, using ','")
            return ','


__all__ = ['UnitFileReader', 'ReadStats']
