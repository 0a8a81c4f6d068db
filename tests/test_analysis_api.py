import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

# Keep API tests independent of request volume.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from cvscore.core.rate_limit import limiter  # noqa: E402
from cvscore.main import app  # noqa: E402

CV_TEXT = (
    "Lerato Mokoena\n"
    "Email: lerato@example.co.za\n"
    "Summary\n"
    "Finance professional based in Pretoria, Gauteng.\n"
    "Experience\n"
    "Accountant, Nedbank, Feb 2018 - Present\n"
    "- Managed month-end reporting and reduced close time by 3 days\n"
    "- Prepared budgets of R12m for the retail division\n"
    "Education\n"
    "BCom Accounting, UNISA, 2017\n"
    "Skills\n"
    "Accounting, Excel, Budgeting, Audit, Tax, Reporting\n"
)

LEGACY_KEYS = {
    "score",
    "rating",
    "strengths",
    "weaknesses",
    "suggestions",
    "sa_score",
    "sa_relevance",
    "skills",
    "job_match",
}


class AnalysisApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._limiter_enabled = limiter.enabled
        limiter.enabled = False
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls):
        limiter.enabled = cls._limiter_enabled

    def test_health(self):
        with TestClient(app) as client:
            response = client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["locale"], "South Africa")
        self.assertTrue(body["catalog_version"])

    def test_startup_logs_catalog_and_scoring_versions(self):
        with self.assertLogs("cvscore.core.lifespan", level="INFO") as logs:
            with TestClient(app):
                pass
        ready = [line for line in logs.output if "cv_engine_ready" in line]
        self.assertEqual(len(ready), 1)
        self.assertIn("scoring_version=1", ready[0])
        self.assertIn("locale=South Africa", ready[0])

    def test_cv_analyze_contract(self):
        response = self.client.post("/v1/cv/analyze", json={"text": CV_TEXT, "job_description": "Accountant"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["generated_at"])
        analysis = body["analysis"]
        self.assertEqual(
            set(analysis),
            {
                "overall_score",
                "rating",
                "format_score",
                "skill_score",
                "regional_score",
                "regional_relevance",
                "strengths",
                "improvements",
                "format_feedback",
                "sections_detected",
                "skills_identified",
                "regional_markers_detected",
            },
        )
        self.assertIn("experience", analysis["sections_detected"])
        self.assertIn("accounting", analysis["skills_identified"])
        self.assertIn("local-employer", analysis["regional_markers_detected"])
        self.assertTrue(1 <= len(analysis["strengths"]) <= 5)

    def test_job_description_is_optional(self):
        response = self.client.post("/v1/cv/analyze", json={"text": CV_TEXT})
        self.assertEqual(response.status_code, 200)

    def test_blank_text_returns_error_envelope(self):
        response = self.client.post("/v1/cv/analyze", json={"text": "   "})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "CV text is required"})

    def test_missing_text_returns_error_envelope(self):
        response = self.client.post("/v1/cv/analyze", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "CV text is required"})

    def test_non_string_text_returns_error_envelope(self):
        response = self.client.post("/v1/cv/analyze", json={"text": 123})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIsInstance(body["error"], str)

    def test_malformed_json_returns_error_envelope(self):
        response = self.client.post(
            "/v1/cv/analyze",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_oversized_text_is_rejected(self):
        response = self.client.post("/v1/cv/analyze", json={"text": "a" * 50001})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_legacy_cv_text_shape(self):
        response = self.client.post("/v1/analyze-cv-text", json={"text": CV_TEXT, "jobDescription": "Accountant"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body), LEGACY_KEYS | {"success"})
        self.assertTrue(body["success"])
        self.assertIsNone(body["job_match"])
        self.assertLessEqual(len(body["strengths"]), 3)
        self.assertLessEqual(len(body["weaknesses"]), 3)
        self.assertLessEqual(len(body["suggestions"]), 2)
        self.assertLessEqual(len(body["skills"]), 8)

    def test_legacy_fields_map_from_canonical_result(self):
        canonical = self.client.post("/v1/cv/analyze", json={"text": CV_TEXT}).json()["analysis"]
        legacy = self.client.post("/v1/analyze-resume-text", json={"resumeContent": CV_TEXT}).json()
        self.assertEqual(legacy["score"], canonical["overall_score"])
        self.assertEqual(legacy["rating"], canonical["rating"])
        self.assertEqual(legacy["sa_score"], canonical["regional_score"])
        self.assertEqual(legacy["sa_relevance"], canonical["regional_relevance"])
        self.assertEqual(legacy["strengths"], canonical["strengths"][:3])
        self.assertEqual(legacy["weaknesses"], canonical["improvements"][:3])
        self.assertEqual(legacy["suggestions"], canonical["format_feedback"][:2])
        self.assertEqual(legacy["skills"], canonical["skills_identified"][:8])

    def test_legacy_resume_text_shape(self):
        response = self.client.post("/v1/analyze-resume-text", json={"resumeContent": CV_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body), LEGACY_KEYS)
        self.assertIsNone(body["job_match"])

    def test_legacy_blank_text_returns_error_envelope(self):
        response = self.client.post("/v1/analyze-resume-text", json={"resumeContent": ""})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "CV text is required"})

    def test_unexpected_failure_returns_500_envelope(self):
        broken = SimpleNamespace(analyze=Mock(side_effect=RuntimeError("boom")))
        with patch("cvscore.services.analysis_service.get_default_analyzer", return_value=broken):
            with self.assertLogs("cvscore.services.analysis_service", level="ERROR") as logs:
                response = self.client.post("/v1/cv/analyze", json={"text": CV_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "error": "Failed to analyze CV"})
        self.assertTrue(any("cv_analysis_failed" in line for line in logs.output))
        self.assertFalse(any("Lerato" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
