import argparse
import json
import sys
from pathlib import Path

from config.settings import RECOGNITION_THRESHOLD
from Commands.dispatcher import reload_gestures
from Commands.mappings import GestureSettings
from Persistence.settings_store import import_bundle, read_bundle
from Recognition.dollarRecognizer import DollarRecognizer
from Recognition.Types import MatcherKind


def read_stroke(path: str) -> list:
    """Reads a stroke file: either a JSON list of {x, y} points or {"points": [...]}."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Could not read stroke '{path}': {e}")
        return []
    if isinstance(data, dict):
        data = data.get("points", [])
    return data if isinstance(data, list) else []


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Recognize a stroke against an exported gesture bundle")
    parser.add_argument("bundle", help="Exported gesture bundle (JSON)")
    parser.add_argument("stroke", help="Stroke to recognize (JSON)")
    parser.add_argument(
        "-f",
        "--fast",
        action="store_true",
        help="Use the Protractor (cosine) matcher instead of the angular search",
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=RECOGNITION_THRESHOLD,
        help="Minimum score reported as a match",
    )
    args = parser.parse_args(argv)

    recognizer = DollarRecognizer()
    settings = GestureSettings()
    import_bundle(read_bundle(args.bundle), settings, recognizer)

    # Bundles without templates can still be rebuilt from the mapped strokes
    if recognizer.template_count() == 0:
        reload_gestures(recognizer, settings.gesture_mappings)

    kind = MatcherKind.FAST_COSINE if args.fast else MatcherKind.ANGULAR_SEARCH
    result = recognizer.recognize(read_stroke(args.stroke), kind)

    matched = result.is_match(args.threshold)
    print(f"{'MATCH' if matched else 'NO MATCH'}: {result.name} ({result.score * 100:.1f}%) in {result.time:.2f} ms")
    return 0 if matched else 1


if __name__ == "__main__":
    sys.exit(main())
