"""
$1 unistroke recognizer with the Protractor cosine variant.

Wobbrock, J.O., Wilson, A.D. and Li, Y. (2007). Gestures without libraries,
toolkits or training: a $1 recognizer for user interface prototypes. UIST '07.
"""

from __future__ import annotations
from collections.abc import Iterable
from time import perf_counter
from typing import Any, Dict, List, Optional, Union

from config.recognizer import MIN_STROKE_POINTS, NO_MATCH

from .geometry import PointsLike, as_point_array
from .matchers import distance_to_score, template_distance
from .normalization import create_template
from .template_store import TemplateStore
from .Types import MatcherKind, RecognitionResult, Template


class DollarRecognizer:
    """
    Scores completed strokes against the templates of an owned store.
    Callers only reach the store through the methods below.
    """

    def __init__(self, store: Optional[TemplateStore] = None) -> None:
        self._store = store if store is not None else TemplateStore()

    # --- Recognition ---

    def recognize(
        self,
        points: PointsLike,
        matcher: Union[MatcherKind, bool] = MatcherKind.ANGULAR_SEARCH,
    ) -> RecognitionResult:
        """
        Returns the best-matching template name and a score in [0, 1].
        `matcher` may be a MatcherKind or the legacy `use_protractor` flag.
        """
        start = perf_counter()
        kind = matcher if isinstance(matcher, MatcherKind) else MatcherKind.from_flag(bool(matcher))

        raw = as_point_array(points)
        if raw.shape[0] < MIN_STROKE_POINTS:
            return self._no_match(start)

        templates = self._store.snapshot()
        if not templates:
            return self._no_match(start)

        candidate = create_template("", raw)
        best: Optional[Template] = None
        best_distance = float("inf")

        for template in templates:
            d = template_distance(candidate, template, kind)
            if d < best_distance:
                best_distance = d
                best = template

        if best is None:
            return self._no_match(start)

        return RecognitionResult(
            name=best.name,
            score=distance_to_score(best_distance, kind),
            time=_elapsed_ms(start),
        )

    @staticmethod
    def _no_match(start: float) -> RecognitionResult:
        return RecognitionResult(name=NO_MATCH, score=0.0, time=_elapsed_ms(start))

    # --- Template management ---

    def add_gesture(self, name: str, points: PointsLike) -> int:
        return self._store.add(name, points)

    def remove_templates_by_name(self, name: str) -> None:
        self._store.remove_by_name(name)

    def clear_all(self) -> None:
        self._store.clear_all()

    def get_template_names(self) -> List[str]:
        return self._store.names_distinct()

    def get_templates_by_name(self, name: str) -> List[Template]:
        return self._store.templates_by_name(name)

    def template_count(self) -> int:
        return len(self._store)

    def export_templates(self) -> List[Dict[str, Any]]:
        return self._store.export_all()

    def import_templates(self, templates: Iterable[Any]) -> None:
        self._store.import_all(templates)


def _elapsed_ms(start: float) -> float:
    return (perf_counter() - start) * 1000.0
