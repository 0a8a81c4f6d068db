import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import cvscore.main  # noqa: F401,E402
from cvscore.core.config.scoring import get_scoring_value  # noqa: E402
from cvscore.engine import analyze  # noqa: E402


class PipelineSmokeTests(unittest.TestCase):
    def test_safe_imports_and_scoring_config_lookup(self):
        self.assertEqual(get_scoring_value("weights.skills"), 0.4)

    def test_engine_runs_end_to_end(self):
        result = analyze("Experience\n- Managed a team in Durban\nSkills: Excel, SQL")
        self.assertIn("experience", result.sections_detected)
        self.assertEqual(result.skills_identified, ("excel", "sql"))
        self.assertIn("major-city", result.regional_markers_detected)


if __name__ == "__main__":
    unittest.main()
