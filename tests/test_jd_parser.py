import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.scoring.jd_parser import local_keyword_extraction, resume_to_text  # noqa: E402
from app.services.jd_service import JobDescriptionError, parse_job_description  # noqa: E402
from tests.resume_samples import strong_resume  # noqa: E402

JD_TEXT = (
    "We are hiring a Senior Python developer with AWS and Docker experience. "
    "Strong communication and leadership skills. Experience with Kubernetes is a plus."
)
RESUME_TEXT = "Python developer; AWS; leadership"


class LocalKeywordExtractionTests(unittest.TestCase):
    def test_vocabulary_and_capitalized_terms(self):
        analysis = local_keyword_extraction(JD_TEXT, RESUME_TEXT)
        keywords = {item.keyword: item for item in analysis.keywords}

        self.assertEqual(keywords["python"].category, "skill")
        self.assertEqual(keywords["python"].importance, "high")
        self.assertTrue(keywords["python"].found)
        self.assertFalse(keywords["docker"].found)
        self.assertEqual(keywords["communication"].category, "soft-skill")
        self.assertEqual(keywords["senior"].importance, "high")
        self.assertEqual(keywords["Senior Python"].category, "qualification")
        self.assertNotIn("Docker", keywords)
        self.assertNotIn("AWS", keywords)

        self.assertEqual(len(analysis.keywords), 11)
        self.assertEqual(analysis.matched_keywords, ["python", "aws", "leadership", "lead"])
        self.assertEqual(
            analysis.missing_keywords,
            ["docker", "kubernetes", "communication", "senior", "Senior Python", "Strong", "Experience"],
        )
        self.assertEqual(analysis.match_score, 36)
        self.assertEqual(analysis.source, "local")

    def test_suggestions_route_to_sections(self):
        analysis = local_keyword_extraction(JD_TEXT, RESUME_TEXT)
        self.assertEqual(
            [item.section for item in analysis.suggestions],
            ["Skills", "Skills", "Summary", "Experience", "Skills"],
        )
        self.assertEqual(
            analysis.suggestions[0].suggestion,
            'Consider adding "docker" to your skills section to improve alignment',
        )

    def test_no_keywords_scores_zero(self):
        analysis = local_keyword_extraction("we need someone nice", "anything")
        self.assertEqual(analysis.keywords, [])
        self.assertEqual(analysis.match_score, 0)

    def test_keyword_list_feeds_the_scorer(self):
        analysis = local_keyword_extraction(JD_TEXT, RESUME_TEXT)
        self.assertIn("python", analysis.keyword_list())
        self.assertIn("Senior Python", analysis.keyword_list())


class ResumeToTextTests(unittest.TestCase):
    def test_includes_sections(self):
        text = resume_to_text(strong_resume())
        self.assertIn("Priya Sharma", text)
        self.assertIn("Optimized database queries reducing response time by 70%", text)
        self.assertIn("Languages: Java, Python, Go, SQL, TypeScript", text)
        self.assertIn("AWS Solutions Architect", text)


class ParseJobDescriptionTests(unittest.TestCase):
    def test_blank_description_is_rejected(self):
        with self.assertRaises(JobDescriptionError):
            parse_job_description("   ")

    def test_falls_back_to_local_extraction(self):
        with patch("app.services.jd_service.json_completion", return_value=None):
            analysis = parse_job_description(JD_TEXT, resume_text=RESUME_TEXT)
        self.assertEqual(analysis.source, "local")
        self.assertEqual(analysis.match_score, 36)

    def test_uses_ai_analysis_when_valid(self):
        payload = {
            "keywords": [
                {"keyword": "python", "category": "skill", "importance": "high", "found": True},
                {"keyword": "terraform", "category": "skill", "importance": "medium", "found": False},
            ],
            "match_score": 50,
            "suggestions": [],
            "missing_keywords": ["terraform"],
            "matched_keywords": ["python"],
        }
        with patch("app.services.jd_service.json_completion", return_value=payload) as completion:
            analysis = parse_job_description(JD_TEXT, document=strong_resume())
        self.assertEqual(analysis.source, "ai")
        self.assertEqual(analysis.keyword_list(), ["python", "terraform"])
        prompt = completion.call_args.kwargs["user_prompt"]
        self.assertIn("Priya Sharma", prompt)
        self.assertIn("Kubernetes", prompt)

    def test_invalid_ai_payload_falls_back(self):
        payload = {"keywords": [{"keyword": "python", "category": "framework", "importance": "high", "found": True}]}
        with patch("app.services.jd_service.json_completion", return_value=payload):
            analysis = parse_job_description(JD_TEXT, resume_text=RESUME_TEXT)
        self.assertEqual(analysis.source, "local")


if __name__ == "__main__":
    unittest.main()
