import sys
import math
import pytest
from pathlib import Path
from unittest.mock import patch

# --- SETUP PATHS ---
if __name__ == "__main__":
    sys.path.append(str(Path(__file__).parents[2]))

from config.recognizer import NO_MATCH
from Recognition.dollarRecognizer import DollarRecognizer
from Recognition.Types import MatcherKind, RecognitionResult

BOTH_MATCHERS = [MatcherKind.ANGULAR_SEARCH, MatcherKind.FAST_COSINE]


def circle(cx: float, cy: float, diameter: float, n: int = 64) -> list:
    r = diameter / 2.0
    return [(cx + r * math.cos(2 * math.pi * i / n), cy + r * math.sin(2 * math.pi * i / n)) for i in range(n)]


def transform(points: list, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0, degrees: float = 0.0) -> list:
    a = math.radians(degrees)
    out = []
    for x, y in points:
        rx = x * math.cos(a) - y * math.sin(a)
        ry = x * math.sin(a) + y * math.cos(a)
        out.append((rx * scale + dx, ry * scale + dy))
    return out


TRIANGLE = [(0, 0), (50, 0), (100, 0), (75, 40), (50, 80), (25, 40), (0, 0)]
ZIGZAG = [(i * 10.0, 0.0 if i % 2 == 0 else 15.0) for i in range(10)]
H_LINE = [(float(x), 0.0) for x in range(0, 101, 10)]
V_LINE = [(0.0, float(y)) for y in range(0, 151, 10)]


@pytest.fixture
def recognizer() -> DollarRecognizer:
    r = DollarRecognizer()
    r.add_gesture("circle", circle(100, 100, 200))
    r.add_gesture("triangle", TRIANGLE)
    r.add_gesture("zigzag", ZIGZAG)
    return r


class TestNoMatch:

    @pytest.mark.parametrize("matcher", BOTH_MATCHERS)
    @pytest.mark.parametrize("stroke", [[], [(1.0, 1.0)]])
    def test_too_few_points(self, recognizer, matcher, stroke):
        result = recognizer.recognize(stroke, matcher)

        assert result.name == NO_MATCH
        assert result.score == 0.0

    def test_too_few_points_skips_pipeline(self, recognizer):
        with patch("Recognition.dollarRecognizer.create_template") as mock_create:
            recognizer.recognize([(1.0, 1.0)])
            mock_create.assert_not_called()

    @pytest.mark.parametrize("matcher", BOTH_MATCHERS)
    def test_empty_store(self, matcher):
        result = DollarRecognizer().recognize(ZIGZAG, matcher)

        assert result.name == NO_MATCH
        assert result.score == 0.0
        assert result.time >= 0.0


class TestRecognize:

    def test_returns_result_value(self, recognizer):
        result = recognizer.recognize(TRIANGLE)

        assert isinstance(result, RecognitionResult)
        assert result.name == "triangle"
        assert 0.0 <= result.score <= 1.0
        assert result.time >= 0.0

    @pytest.mark.parametrize("matcher", BOTH_MATCHERS)
    def test_scaled_translated_circle(self, matcher):
        """A 200px circle template recognizes an 80px circle drawn elsewhere."""
        r = DollarRecognizer()
        r.add_gesture("circle", circle(100, 100, 200))
        r.add_gesture("triangle", TRIANGLE)

        result = r.recognize(circle(500, 500, 80), matcher)

        assert result.name == "circle"
        assert result.score > 0.85

    @pytest.mark.parametrize("degrees", [-40.0, -15.0, 0.0, 20.0, 45.0])
    def test_invariance(self, recognizer, degrees):
        query = transform(TRIANGLE, scale=2.5, dx=-300.0, dy=42.0, degrees=degrees)

        result = recognizer.recognize(query, MatcherKind.ANGULAR_SEARCH)

        assert result.name == "triangle"
        assert result.score > 0.9

    def test_own_template_beats_unrelated(self):
        r = DollarRecognizer()
        r.add_gesture("triangle", TRIANGLE)
        own = r.recognize(transform(TRIANGLE, scale=0.5, dx=10.0, degrees=30.0)).score

        r = DollarRecognizer()
        r.add_gesture("zigzag", ZIGZAG)
        unrelated = r.recognize(transform(TRIANGLE, scale=0.5, dx=10.0, degrees=30.0)).score

        assert own >= unrelated

    def test_boolean_flag_selects_fast_matcher(self, recognizer):
        with patch("Recognition.dollarRecognizer.template_distance", return_value=0.5) as mock_distance:
            recognizer.recognize(TRIANGLE, True)

        kinds = {call.args[2] for call in mock_distance.call_args_list}
        assert kinds == {MatcherKind.FAST_COSINE}
        assert mock_distance.call_count == 3

    def test_vertical_line_matches_line_template(self):
        """Indicative-angle rotation lays both lines along the same axis."""
        r = DollarRecognizer()
        r.add_gesture("line", H_LINE)
        r.add_gesture("circle", circle(0, 0, 100))

        result = r.recognize(V_LINE, MatcherKind.ANGULAR_SEARCH)

        assert result.name == "line"
        assert math.isfinite(result.score)

    def test_tie_break_prefers_first_added(self):
        r = DollarRecognizer()
        r.add_gesture("A", TRIANGLE)
        r.add_gesture("B", TRIANGLE)

        assert r.recognize(TRIANGLE, MatcherKind.ANGULAR_SEARCH).name == "A"
        assert r.recognize(TRIANGLE, MatcherKind.FAST_COSINE).name == "A"

    def test_score_is_clamped(self, recognizer):
        with patch("Recognition.dollarRecognizer.template_distance", return_value=1e9):
            result = recognizer.recognize(TRIANGLE)

        assert result.score == 0.0
        assert result.name == "circle"


class TestTemplateManagement:

    def test_add_gesture_counts(self):
        r = DollarRecognizer()
        assert [r.add_gesture("swipe", H_LINE) for _ in range(3)] == [1, 2, 3]

    def test_names_and_lookup(self, recognizer):
        assert recognizer.get_template_names() == ["circle", "triangle", "zigzag"]
        assert len(recognizer.get_templates_by_name("triangle")) == 1
        assert recognizer.template_count() == 3

    def test_remove_templates_by_name(self, recognizer):
        recognizer.remove_templates_by_name("triangle")
        recognizer.remove_templates_by_name("triangle")

        assert recognizer.get_template_names() == ["circle", "zigzag"]
        assert recognizer.recognize(TRIANGLE).name != "triangle"

    def test_clear_all(self, recognizer):
        recognizer.clear_all()
        assert recognizer.recognize(TRIANGLE).name == NO_MATCH

    def test_export_import_round_trip(self, recognizer):
        exported = recognizer.export_templates()

        fresh = DollarRecognizer()
        fresh.import_templates(exported)

        assert fresh.get_template_names() == recognizer.get_template_names()
        assert fresh.recognize(TRIANGLE).name == "triangle"


def run_tests_directly() -> None:
    """Entry point for running this module directly."""
    print(f"--- Running tests for {Path(__file__).name} ---")
    exit_code = pytest.main(["-v", "-p", "no:cacheprovider", __file__])
    sys.exit(exit_code)

if __name__ == "__main__":
    run_tests_directly()
