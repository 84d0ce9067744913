"""Tests for task list parsing."""

import unittest

from streamgantt.errors import MalformedRecord
from streamgantt.records import TaskRecord, parse_document, parse_line


class TestParseLine(unittest.TestCase):
    def test_all_fields(self):
        t = parse_line(" api | Grid API | 5 | kickoff  schema | backend | 2021-08-09 ")
        self.assertEqual(
            t,
            TaskRecord(
                id="api",
                name="Grid API",
                duration=5,
                dependencies=("kickoff", "schema"),
                stream="backend",
                start_date="2021-08-09",
            ),
        )

    def test_optional_trailing_fields(self):
        t = parse_line("a|Task A|3|")
        self.assertEqual(t.dependencies, ())
        self.assertIsNone(t.stream)
        self.assertIsNone(t.start_date)

    def test_empty_stream_is_unassigned(self):
        self.assertIsNone(parse_line("a|Task A|3||   |").stream)

    def test_duplicate_dependencies_collapse(self):
        self.assertEqual(parse_line("a|A|1|b c b").dependencies, ("b", "c"))

    def test_missing_duration(self):
        with self.assertRaises(MalformedRecord) as ctx:
            parse_line("a|Task A||")
        self.assertEqual(ctx.exception.line, "a|Task A||")
        self.assertIn("missing duration", str(ctx.exception))

    def test_non_numeric_duration(self):
        with self.assertRaises(MalformedRecord):
            parse_line("a|Task A|three|")

    def test_non_positive_duration(self):
        with self.assertRaises(MalformedRecord):
            parse_line("a|Task A|0|")

    def test_wrong_field_count(self):
        for line in ("a|Task A|3", "a|A|1||s|2021-01-01|extra"):
            with self.subTest(line=line):
                with self.assertRaises(MalformedRecord):
                    parse_line(line)

    def test_bad_start_date(self):
        with self.assertRaises(MalformedRecord):
            parse_line("a|A|1||s|next monday")

    def test_start_date_must_match_default_format(self):
        for raw in ("20210809", "2021-W32-1", "2021-8-9", "2021-02-30", "\u0662021-08-09"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedRecord):
                    parse_line(f"a|A|1||s|{raw}")

    def test_start_date_in_configured_format(self):
        t = parse_line("a|A|1||s|09-08-2021", date_format="DD-MM-YYYY")
        self.assertEqual(t.start_date, "09-08-2021")
        with self.assertRaises(MalformedRecord):
            parse_line("a|A|1||s|2021-08-09", date_format="DD-MM-YYYY")

    def test_start_date_unchecked_for_unknown_format_tokens(self):
        t = parse_line("a|A|1||s|2021-08-09 10:00", date_format="YYYY-MM-DD HH:mm")
        self.assertEqual(t.start_date, "2021-08-09 10:00")

    def test_duration_must_be_plain_digits(self):
        for raw in ("+5", "1_000", "-3", "\u0663", " 4 2"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedRecord):
                    parse_line(f"a|A|{raw}|")

    def test_missing_name(self):
        with self.assertRaises(MalformedRecord):
            parse_line("a||1|")


class TestParseDocument(unittest.TestCase):
    def test_title_and_order(self):
        doc = parse_document("\n  Plan  \n\nb|B|1|\n\na|A|2|b\n")
        self.assertEqual(doc.title, "Plan")
        self.assertEqual([t.id for t in doc.tasks], ["b", "a"])

    def test_title_only(self):
        doc = parse_document("Plan\n")
        self.assertEqual(doc.tasks, [])

    def test_blank_document(self):
        with self.assertRaises(MalformedRecord):
            parse_document("\n   \n")

    def test_bad_line_aborts(self):
        with self.assertRaises(MalformedRecord) as ctx:
            parse_document("Plan\na|A|1|\nb|B\n")
        self.assertEqual(ctx.exception.line, "b|B")


if __name__ == "__main__":
    unittest.main()
