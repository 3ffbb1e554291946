import sys
import math
import pytest
import numpy as np
from pathlib import Path

# --- SETUP PATHS ---
if __name__ == "__main__":
    sys.path.append(str(Path(__file__).parents[2]))

from config.recognizer import NUM_POINTS
from Recognition.normalization import create_template
from Recognition.template_store import TemplateStore


def circle(diameter: float = 200.0, n: int = 64) -> list:
    r = diameter / 2.0
    return [(r * math.cos(2 * math.pi * i / n), r * math.sin(2 * math.pi * i / n)) for i in range(n)]


CHECK = [(0, 50), (20, 80), (90, 0)]
LINE = [(0, 0), (50, 0), (100, 0)]


@pytest.fixture
def store() -> TemplateStore:
    s = TemplateStore()
    s.add("circle", circle())
    s.add("check", CHECK)
    s.add("circle", circle(120))
    return s


class TestTemplateStore:

    def test_starts_empty(self):
        s = TemplateStore()
        assert len(s) == 0
        assert s.names_distinct() == []
        assert s.export_all() == []

    def test_add_returns_occurrence_count(self):
        s = TemplateStore()
        assert s.add("zig", CHECK) == 1
        assert s.add("other", LINE) == 1
        assert s.add("zig", CHECK) == 2
        assert s.add("zig", LINE) == 3

    def test_add_normalizes(self, store):
        for template in store:
            assert template.points.shape == (NUM_POINTS, 2)
            assert template.vector.shape == (2 * NUM_POINTS,)

    def test_names_distinct_first_seen_order(self, store):
        assert store.names_distinct() == ["circle", "check"]

    def test_templates_by_name_in_insertion_order(self, store):
        circles = store.templates_by_name("circle")

        assert len(circles) == 2
        assert circles[0].source.shape == (64, 2)
        assert np.allclose(circles[1].source, circle(120))
        assert store.templates_by_name("missing") == []

    def test_remove_by_name(self, store):
        store.remove_by_name("circle")

        assert store.names_distinct() == ["check"]
        assert len(store) == 1

    def test_remove_unknown_name_is_noop(self, store):
        store.remove_by_name("missing")
        assert len(store) == 3

    def test_clear_all(self, store):
        store.clear_all()
        assert len(store) == 0

    def test_snapshot_is_independent_of_later_mutation(self, store):
        snap = store.snapshot()
        store.clear_all()

        assert len(snap) == 3


class TestExportImport:

    def test_export_is_plain_data(self, store):
        exported = store.export_all()

        assert len(exported) == 3
        first = exported[0]
        assert first["name"] == "circle"
        assert len(first["points"]) == NUM_POINTS
        assert set(first["points"][0]) == {"x", "y"}
        assert len(first["vector"]) == 2 * NUM_POINTS
        assert len(first["originalPoints"]) == 64

    def test_mutating_export_does_not_touch_store(self, store):
        exported = store.export_all()
        exported[0]["name"] = "changed"
        exported[0]["points"][0]["x"] = 1e6
        exported.clear()

        assert store.names_distinct() == ["circle", "check"]
        assert store.templates_by_name("circle")[0].points[0, 0] != 1e6

    def test_round_trip(self, store):
        before = {name: [t.points.copy() for t in store.templates_by_name(name)] for name in store.names_distinct()}

        store.import_all(store.export_all())

        assert store.names_distinct() == list(before)
        for name, points in before.items():
            after = store.templates_by_name(name)
            assert len(after) == len(points)
            for old, new in zip(points, after):
                assert np.allclose(old, new.points, atol=1e-6)

    def test_import_replaces_content(self, store):
        store.import_all([{"name": "line", "points": [{"x": 0, "y": 0}, {"x": 100, "y": 0}]}])

        assert store.names_distinct() == ["line"]

    def test_import_prefers_original_points(self):
        s = TemplateStore()
        s.import_all([{
            "name": "check",
            "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}],
            "originalPoints": [{"x": x, "y": y} for x, y in CHECK],
        }])

        imported = s.templates_by_name("check")[0]
        assert np.allclose(imported.points, create_template("check", CHECK).points)

    def test_import_original_points_without_points_key(self):
        s = TemplateStore()
        s.import_all([{"name": "check", "originalPoints": [{"x": x, "y": y} for x, y in CHECK]}])

        assert len(s) == 1
        assert np.allclose(s.templates_by_name("check")[0].points, create_template("check", CHECK).points)

    def test_import_accepts_templates(self):
        template = create_template("check", CHECK)
        s = TemplateStore()
        s.import_all([template])

        assert np.allclose(s.templates_by_name("check")[0].points, template.points)

    def test_import_recomputes_vector(self):
        s = TemplateStore()
        s.import_all([{"name": "check", "points": [{"x": x, "y": y} for x, y in CHECK], "vector": [0.0] * 4}])

        assert s.templates_by_name("check")[0].vector.shape == (2 * NUM_POINTS,)

    def test_import_skips_malformed_entries(self):
        """Bad entries are dropped; the rest of the batch still loads."""
        entries = [
            {"points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]},
            {"name": "", "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]},
            {"name": "no-points"},
            {"name": "empty", "points": []},
            {"name": "not-a-list", "points": "oops"},
            {"name": "bad-coords", "points": [{"x": "a", "y": 0}]},
            {"name": "missing-y", "points": [{"x": 1}]},
            {"name": "nan", "points": [{"x": float("nan"), "y": 0}, {"x": 1, "y": 1}]},
            {"name": 5, "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]},
            "not-a-mapping",
            None,
            {"name": "ok", "points": [[0, 0], [10, 10], [20, 0]]},
        ]
        s = TemplateStore()
        s.import_all(entries)

        assert s.names_distinct() == ["ok"]


def run_tests_directly() -> None:
    """Entry point for running this module directly."""
    print(f"--- Running tests for {Path(__file__).name} ---")
    exit_code = pytest.main(["-v", "-p", "no:cacheprovider", __file__])
    sys.exit(exit_code)

if __name__ == "__main__":
    run_tests_directly()
