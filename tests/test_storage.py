import csv
import io
import json

import pytest

from intake.config import StorageConfig
from intake.errors import PersistError, StorageInitError
from intake.models import SubmissionIn
from intake.storage import SubmissionStore, csv_line, ensure_storage


def test_ensure_storage_is_idempotent(tmp_path):
    config = StorageConfig(data_dir=tmp_path / "nested" / "data")
    ensure_storage(config)
    SubmissionStore(config).append(SubmissionIn(name="Jane", email="jane@example.com"))

    ensure_storage(config)
    ensure_storage(config)

    lines = config.csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "timestamp,name,email"
    assert len(lines) == 2
    assert len(config.jsonl_path.read_text(encoding="utf-8").splitlines()) == 1


def test_ensure_storage_raises_init_error(tmp_path):
    blocker = tmp_path / "data"
    blocker.write_text("not a directory")
    with pytest.raises(StorageInitError):
        ensure_storage(StorageConfig(data_dir=blocker))


def test_csv_line_quoting():
    assert csv_line(["a", "b", "c"]) == "a,b,c\n"
    assert csv_line(["Doe, Jane"]) == '"Doe, Jane"\n'
    assert csv_line(['say "hi"']) == '"say ""hi"""\n'
    assert csv_line(["two\nlines"]) == '"two\nlines"\n'


def test_csv_comma_name_round_trips(tmp_path):
    config = StorageConfig(data_dir=tmp_path)
    ensure_storage(config)
    record = SubmissionStore(config).append(SubmissionIn(name="Doe, Jane", email="jane@example.com"))

    rows = list(csv.reader(io.StringIO(config.csv_path.read_text(encoding="utf-8"))))
    assert rows[1] == [record.timestamp, "Doe, Jane", "jane@example.com"]


def test_append_writes_json_line(tmp_path):
    config = StorageConfig(data_dir=tmp_path)
    ensure_storage(config)
    record = SubmissionStore(config).append(SubmissionIn(name="Zoë", email="zoe@example.com"))

    text = config.jsonl_path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert "Zoë" in text
    assert json.loads(text) == {"timestamp": record.timestamp, "name": "Zoë", "email": "zoe@example.com"}


def test_append_failure_raises_persist_error(tmp_path):
    config = StorageConfig(data_dir=tmp_path / "missing")
    with pytest.raises(PersistError):
        SubmissionStore(config).append(SubmissionIn(name="Jane", email="jane@example.com"))
