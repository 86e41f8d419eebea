"""
Classify still images offline with the colour-rule classifier.

Usage:
  python currency_detector/scripts/classify_images.py note1.jpg note2.png ...

Prints the mean colour, the rule that fired (or the fallback scores) and the
denomination for each file. Handy for tuning the rule thresholds on photos.
"""
import sys
from pathlib import Path

ROOT = Path(__file__).parents[2]
sys.path.insert(0, str(ROOT))

from currency_detector.adapters.vision.color_rules import classify_features, fallback_scores
from currency_detector.adapters.vision.features import decode_image, extract_features
from currency_detector.orchestrator.catalog import get_note
from currency_detector.orchestrator.errors import FrameUnreadableError

if len(sys.argv) < 2:
    print(__doc__)
    sys.exit(2)

failed = 0
for arg in sys.argv[1:]:
    path = Path(arg)
    if not path.exists():
        print(f"[ERROR] {path} not found")
        failed += 1
        continue
    try:
        features = extract_features(decode_image(path.read_bytes()))
    except FrameUnreadableError as e:
        print(f"[ERROR] {path.name}: {e}")
        failed += 1
        continue

    result = classify_features(features)
    note = get_note(result.denomination)
    rgb = f"rgb=({features.red:.1f}, {features.green:.1f}, {features.blue:.1f})"
    if result.rule:
        how = f"rule {result.rule}"
    else:
        scores = ", ".join(f"{v}:{s:.2f}" for v, s in fallback_scores(features).items())
        how = f"fallback [{scores}]"
    print(f"  {path.name}  {rgb}  {how}  ->  {result.denomination} ({note.name})")

sys.exit(1 if failed else 0)
