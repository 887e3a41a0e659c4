import json
from datetime import datetime, timezone

from journal_nlp.ingest import EntryLoader


def test_plaintext_with_date_in_filename(tmp_path):
    path = tmp_path / "2026-03-14_morning.md"
    path.write_text("Slept well.\r\n\r\n\r\n\r\nLong walk after.\n", encoding="utf-8")
    (entry,) = EntryLoader().load_paths([str(path)])
    assert entry.id == "2026-03-14_morning"
    assert entry.content == "Slept well.\n\nLong walk after."
    assert entry.created_at.date().isoformat() == "2026-03-14"


def test_empty_plaintext_is_skipped(tmp_path):
    path = tmp_path / "blank.txt"
    path.write_text("   \n", encoding="utf-8")
    assert EntryLoader().load_paths([str(path)]) == []


def test_json_list_and_entries_key(tmp_path):
    listing = tmp_path / "list.json"
    listing.write_text(
        json.dumps([{"id": "a", "text": "First entry"}, {"content": ""}, 42]),
        encoding="utf-8",
    )
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(
        json.dumps({"entries": [{"id": "b", "body": "Second entry", "createdAt": "2026-01-02T08:00:00Z"}]}),
        encoding="utf-8",
    )
    entries = EntryLoader().load_paths([str(listing), str(wrapped)])
    assert [e.id for e in entries] == ["a", "b"]
    assert entries[1].created_at == datetime(2026, 1, 2, 8, 0, tzinfo=timezone.utc)


def test_single_json_object(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(json.dumps({"id": "solo", "content": "Just one", "mood": "calm"}), encoding="utf-8")
    (entry,) = EntryLoader().load_paths([str(path)])
    assert entry.id == "solo"
    assert entry.extra == {"mood": "calm"}


def test_jsonl_millisecond_timestamps_and_bad_lines(tmp_path):
    path = tmp_path / "export.jsonl"
    path.write_text(
        "\n".join(
            [
                json.dumps({"content": "Entry with epoch", "timestamp": 1767225600000}),
                "{not json",
                "",
                json.dumps({"content": "Entry with bad date", "date": "someday"}),
            ]
        ),
        encoding="utf-8",
    )
    entries = EntryLoader().load_paths([str(path)])
    assert len(entries) == 2
    assert entries[0].created_at == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert entries[1].created_at is None
    assert len(entries[0].id) == 16


def test_derived_ids_are_stable(tmp_path):
    path = tmp_path / "export.jsonl"
    path.write_text(json.dumps({"content": "Same content"}), encoding="utf-8")
    first = EntryLoader().load_paths([str(path)])[0].id
    second = EntryLoader().load_paths([str(path)])[0].id
    assert first == second


def test_directory_walk_and_missing_paths(tmp_path):
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.txt").write_text("Entry B text", encoding="utf-8")
    (tmp_path / "a.txt").write_text("Entry A text", encoding="utf-8")
    (tmp_path / "ignored.csv").write_text("x,y", encoding="utf-8")
    entries = EntryLoader().load_paths([str(tmp_path), str(tmp_path / "missing.txt")])
    assert [e.id for e in entries] == ["a", "b"]


def test_invalid_json_file_read_as_text(tmp_path):
    path = tmp_path / "notes.json"
    path.write_text("not really json", encoding="utf-8")
    (entry,) = EntryLoader().load_paths([str(path)])
    assert entry.content == "not really json"


def test_created_at_iso(tmp_path):
    path = tmp_path / "2026_05_01.txt"
    path.write_text("May day", encoding="utf-8")
    (entry,) = EntryLoader().load_paths([str(path)])
    assert entry.created_at_iso() == "2026-05-01T00:00:00"
