"""Tests for Mermaid chart lines and documents."""

import unittest

from streamgantt.chart import ChartDocument, ChartLine, LineKind, build_chart, lines_for_stream
from streamgantt.config import ChartSettings
from streamgantt.records import TaskRecord
from streamgantt.streams import UNASSIGNED_STREAM


def _t(id, deps=(), stream=None, start=None, duration=1):
    return TaskRecord(
        id=id,
        name=f"Task {id}",
        duration=duration,
        dependencies=tuple(deps),
        stream=stream,
        start_date=start,
    )


def _deps(lines):
    return [ln.dependencies for ln in lines if ln.kind is LineKind.TASK]


class TestChartLine(unittest.TestCase):
    def test_section(self):
        self.assertEqual(ChartLine.section("backend").render(), "section backend")

    def test_task_minimal(self):
        line = ChartLine.task(TaskRecord(id="", name="Plan", duration=2), [])
        self.assertIsNone(line.id)
        self.assertEqual(line.render(), "Plan :2d")

    def test_task_all_fields(self):
        line = ChartLine.task(_t("api", start="2021-08-09", duration=5), ["a", "b"])
        self.assertEqual(line.render(), "Task api :api, after a b, 2021-08-09, 5d")

    def test_unit(self):
        line = ChartLine.task(_t("a", duration=3), [], unit="w")
        self.assertEqual(line.render(), "Task a :a, 3w")


class TestLinesForStream(unittest.TestCase):
    def test_implicit_sequence(self):
        tasks = [_t("t1"), _t("t2"), _t("t3", ["t1"])]
        lines = lines_for_stream("alpha", tasks, serialize=True)
        self.assertEqual(lines[0], ChartLine.section("alpha"))
        self.assertEqual(_deps(lines), [(), ("t1",), ("t1", "t2")])

    def test_existing_dependency_not_duplicated(self):
        tasks = [_t("t1"), _t("t2", ["t1"])]
        self.assertEqual(_deps(lines_for_stream("s", tasks, serialize=True)), [(), ("t1",)])

    def test_no_injection_without_serialize(self):
        tasks = [_t("t1"), _t("t2")]
        self.assertEqual(_deps(lines_for_stream("s", tasks, serialize=False)), [(), ()])

    def test_records_not_mutated(self):
        tasks = [_t("t1"), _t("t2")]
        lines_for_stream("s", tasks, serialize=True)
        self.assertEqual(tasks[1].dependencies, ())

    def test_start_date_kept_alongside_injected_dependency(self):
        tasks = [_t("t1"), _t("t2", start="2021-08-09")]
        line = lines_for_stream("s", tasks, serialize=True)[2]
        self.assertEqual(line.render(), "Task t2 :t2, after t1, 2021-08-09, 1d")


class TestBuildChart(unittest.TestCase):
    def test_unassigned_first_then_encounter_order(self):
        ordered = {
            "zeta": [_t("z1", stream="zeta"), _t("z2", stream="zeta")],
            UNASSIGNED_STREAM: [_t("u1"), _t("u2")],
            "alpha": [_t("a1", stream="alpha")],
        }
        doc = build_chart("Plan", ordered)
        sections = [ln.name for ln in doc.lines if ln.kind is LineKind.SECTION]
        self.assertEqual(sections, [UNASSIGNED_STREAM, "zeta", "alpha"])
        self.assertEqual(_deps(doc.lines), [(), (), (), ("z1",), ()])

    def test_empty_unassigned_omitted(self):
        doc = build_chart("Plan", {UNASSIGNED_STREAM: [], "a": [_t("x")]})
        self.assertEqual(doc.lines[0], ChartLine.section("a"))

    def test_settings(self):
        settings = ChartSettings(date_format="DD-MM-YYYY", excludes="sunday", duration_unit="h", title="Other")
        doc = build_chart("Plan", {"s": [_t("x", duration=4)]}, settings)
        self.assertEqual(
            doc.render(),
            "gantt\n"
            "    title Other\n"
            "    dateFormat DD-MM-YYYY\n"
            "    excludes sunday\n"
            "    section s\n"
            "    Task x :x, 4h\n",
        )


class TestChartDocument(unittest.TestCase):
    def test_header_only(self):
        self.assertEqual(
            ChartDocument(title="Plan").render(),
            "gantt\n    title Plan\n    dateFormat YYYY-MM-DD\n    excludes weekends\n",
        )


if __name__ == "__main__":
    unittest.main()
