"""
Flat-file storage for submissions.

Responsibilities:
- create the data directory and both output files on demand
- serialize a submission to one JSON line and one CSV row
- append both, JSON first, each in a single write call

There is no cross-file atomicity: if the CSV append fails after the JSON
append succeeded, the two files disagree by one record.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime, timezone

from .config import StorageConfig
from .errors import PersistError, StorageInitError
from .models import Submission, SubmissionIn
from .rules import CSV_DELIMITER, CSV_FIELDS

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def csv_line(values) -> str:
    """
    Render one CSV row terminated by a single LF.

    Cells containing the delimiter, a double quote or a line break are
    quoted, with interior quotes doubled.
    """
    outp = io.StringIO(newline="")
    writer = csv.writer(
        outp,
        delimiter=CSV_DELIMITER,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(values)
    return outp.getvalue()


def json_line(record: Submission) -> str:
    # model_dump keeps declaration order: timestamp, name, email
    return json.dumps(record.model_dump(), ensure_ascii=False) + "\n"


def _create_if_missing(path, initial: str) -> bool:
    # "x" mode never truncates: an existing file raises FileExistsError
    try:
        with open(path, "x", encoding="utf-8", newline="") as f:
            f.write(initial)
    except FileExistsError:
        return False
    return True


def ensure_storage(config: StorageConfig) -> None:
    """Create the data directory, the JSONL file and the CSV file with its header."""
    try:
        config.data_dir.mkdir(parents=True, exist_ok=True)
        if _create_if_missing(config.jsonl_path, ""):
            logger.info("created %s", config.jsonl_path)
        if _create_if_missing(config.csv_path, csv_line(CSV_FIELDS)):
            logger.info("created %s with header", config.csv_path)
    except OSError as exc:
        raise StorageInitError(f"cannot initialize storage in {config.data_dir}: {exc}") from exc


def _append(path, line: str) -> None:
    with open(path, "a", encoding="utf-8", newline="") as f:
        f.write(line)


class SubmissionStore:
    """Appends validated submissions to the JSONL and CSV files of one data directory."""

    def __init__(self, config: StorageConfig):
        self.config = config

    def append(self, submission: SubmissionIn) -> Submission:
        record = Submission(
            timestamp=_utc_now_iso(),
            name=submission.name,
            email=submission.email,
        )
        try:
            _append(self.config.jsonl_path, json_line(record))
            _append(
                self.config.csv_path,
                csv_line([record.timestamp, record.name, record.email]),
            )
        except (OSError, UnicodeEncodeError) as exc:
            raise PersistError(f"failed to append submission: {exc}") from exc
        return record
