from __future__ import annotations
from typing import Iterable
import csv
import io

from .frequency import FrequencyEntry

TEXT_FILENAME = "frankenstein_pro_keywords.txt"
CSV_FILENAME = "keyword_frequency.csv"
CSV_HEADER = ("Keyword", "Frequency")


def to_text(processed: str) -> str:
    return processed or ""


def to_csv(entries: Iterable[FrequencyEntry]) -> str:
    """Render the frequency table as CSV: header, then one row per entry in the given order."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow((entry.keyword, entry.frequency))
    return buf.getvalue()

__all__ = ["to_text", "to_csv", "TEXT_FILENAME", "CSV_FILENAME", "CSV_HEADER"]
