"""Tests for the thread document parser and serializer."""

from ideathread.threads.document import parse_thread_document, serialize_thread_document
from ideathread.threads.markers import encode_marker
from ideathread.threads.models import Entry

ID_1 = "aaaaaaaa-0000-4000-8000-000000000001"
ID_2 = "aaaaaaaa-0000-4000-8000-000000000002"

SAMPLE = (
    f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:00:00.000Z)\n"
    "First thought.\n"
    "\n"
    f"[//]: # (idea:id={ID_2} created_at=2024-01-15T09:05:00.000Z is_ai=true)\n"
    "A reply."
)


class TestParse:
    def test_sample_document(self):
        entries = parse_thread_document(SAMPLE)
        assert len(entries) == 2
        first, second = entries
        assert (first.id, first.created_at, first.is_ai, first.content) == (
            ID_1,
            "2024-01-15T09:00:00.000Z",
            False,
            "First thought.",
        )
        assert (second.id, second.created_at, second.is_ai, second.content) == (
            ID_2,
            "2024-01-15T09:05:00.000Z",
            True,
            "A reply.",
        )

    def test_thread_id_left_empty(self):
        assert all(e.thread_id == "" for e in parse_thread_document(SAMPLE))

    def test_empty_and_none(self):
        assert parse_thread_document("") == []
        assert parse_thread_document(None) == []

    def test_no_markers(self):
        assert parse_thread_document("just some notes\nwith no markers") == []

    def test_preamble_dropped(self):
        text = "# stray heading\n\n" + SAMPLE
        entries = parse_thread_document(text)
        assert [e.id for e in entries] == [ID_1, ID_2]
        assert entries[0].content == "First thought."

    def test_marker_with_empty_body(self):
        text = f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:00:00.000Z)\n\n\n"
        entries = parse_thread_document(text)
        assert len(entries) == 1
        assert entries[0].content == ""

    def test_blank_lines_trimmed_but_inner_kept(self):
        text = (
            f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:00:00.000Z)\n"
            "\n"
            "para one\n"
            "\n"
            "para two\n"
            "\n"
            "\n"
        )
        assert parse_thread_document(text)[0].content == "para one\n\npara two"

    def test_malformed_marker_is_content(self):
        text = (
            f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:00:00.000Z)\n"
            "[//]: # (idea:id=NOT-A-UUID created_at=2024-01-15T09:00:00.000Z)\n"
            "after"
        )
        entries = parse_thread_document(text)
        assert len(entries) == 1
        assert entries[0].content == "[//]: # (idea:id=NOT-A-UUID created_at=2024-01-15T09:00:00.000Z)\nafter"

    def test_duplicate_ids_kept_in_order(self):
        text = (
            f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:00:00.000Z)\n"
            "one\n\n"
            f"[//]: # (idea:id={ID_1} created_at=2024-01-15T09:01:00.000Z)\n"
            "two"
        )
        assert [e.content for e in parse_thread_document(text)] == ["one", "two"]


class TestSerialize:
    def test_sample_round_trip_is_byte_identical(self):
        assert serialize_thread_document(parse_thread_document(SAMPLE)) == SAMPLE

    def test_empty(self):
        assert serialize_thread_document([]) == ""

    def test_no_trailing_newline(self):
        text = serialize_thread_document([Entry(id=ID_1, created_at="2024-01-15T09:00:00.000Z", content="x")])
        assert not text.endswith("\n")

    def test_idempotent(self):
        once = serialize_thread_document(parse_thread_document(SAMPLE + "\n\n\n"))
        twice = serialize_thread_document(parse_thread_document(once))
        assert once == twice == SAMPLE

    def test_multiline_content_survives(self):
        entries = [
            Entry(id=ID_1, created_at="2024-01-15T09:00:00.000Z", content="line 1\n\n- item\n- item"),
            Entry(id=ID_2, created_at="2024-01-15T09:05:00.000Z", content="![image-1](a.png)", is_ai=True),
        ]
        parsed = parse_thread_document(serialize_thread_document(entries))
        assert [(e.id, e.content, e.is_ai) for e in parsed] == [(e.id, e.content, e.is_ai) for e in entries]


class TestMarkerLikeContent:
    def test_marker_line_in_content_does_not_split_entry(self):
        inner = encode_marker(ID_2, "2024-01-15T09:05:00.000Z")
        entry = Entry(id=ID_1, created_at="2024-01-15T09:00:00.000Z", content=f"quoted:\n{inner}\nend")

        text = serialize_thread_document([entry])
        assert f"\\{inner}" in text

        parsed = parse_thread_document(text)
        assert len(parsed) == 1
        assert parsed[0].content == entry.content

    def test_already_escaped_line_keeps_its_backslash(self):
        inner = "\\" + encode_marker(ID_2, "2024-01-15T09:05:00.000Z")
        entry = Entry(id=ID_1, created_at="2024-01-15T09:00:00.000Z", content=inner)
        parsed = parse_thread_document(serialize_thread_document([entry]))
        assert parsed[0].content == inner
