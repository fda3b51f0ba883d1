import copy
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import get_scoring_config  # noqa: E402
from app.schemas.resume import ResumeDocument  # noqa: E402
from app.scoring.categories import (  # noqa: E402
    completeness_score,
    content_score,
    has_metric,
    keyword_score,
    readability_score,
    round_half_up,
    starts_with_action_verb,
    structure_score,
)
from app.scoring.policy import policy_from_config  # noqa: E402
from tests.resume_samples import bullets_resume, strong_resume  # noqa: E402


class RoundingTests(unittest.TestCase):
    def test_ties_round_up(self):
        self.assertEqual(round_half_up(70.5), 71)
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(66.6), 67)
        self.assertEqual(round_half_up(14.2), 14)


class StructureScoreTests(unittest.TestCase):
    def test_complete_resume_keeps_full_score(self):
        self.assertEqual(structure_score(strong_resume()), 100)

    def test_empty_resume_loses_every_penalty(self):
        self.assertEqual(structure_score(ResumeDocument()), 10)

    def test_individual_penalties(self):
        self.assertEqual(structure_score(strong_resume(personalInfo={"email": "a@b.co", "phone": "1"})), 85)
        self.assertEqual(structure_score(strong_resume(personalInfo={"name": "A", "phone": "1"})), 90)
        self.assertEqual(structure_score(strong_resume(personalInfo={"name": "A", "email": "a@b.co"})), 95)
        self.assertEqual(structure_score(strong_resume(experience=[])), 75)
        self.assertEqual(structure_score(strong_resume(education=[])), 90)
        self.assertEqual(structure_score(strong_resume(skills=[])), 90)

    def test_summary_must_reach_fifty_characters(self):
        self.assertEqual(structure_score(strong_resume(summary="s" * 49)), 85)
        self.assertEqual(structure_score(strong_resume(summary="s" * 50)), 100)


class KeywordScoreTests(unittest.TestCase):
    def test_default_without_job_keywords(self):
        self.assertEqual(keyword_score(strong_resume()), 75)
        self.assertEqual(keyword_score(strong_resume(), []), 75)
        self.assertEqual(keyword_score(ResumeDocument(), None), 75)

    def test_all_keywords_found_case_insensitively(self):
        self.assertEqual(keyword_score(strong_resume(), ["PYTHON", "kafka", "Microservices"]), 100)

    def test_partial_match_is_rounded(self):
        self.assertEqual(keyword_score(strong_resume(), ["python", "kafka", "cobol"]), 67)
        self.assertEqual(keyword_score(strong_resume(), ["python", "cobol"]), 50)
        self.assertEqual(
            keyword_score(strong_resume(), ["python", "zq1", "zq2", "zq3", "zq4", "zq5", "zq6", "zq7"]),
            13,
        )

    def test_personal_info_is_not_part_of_corpus(self):
        self.assertEqual(keyword_score(strong_resume(), ["bangalore"]), 0)


class ContentScoreTests(unittest.TestCase):
    def test_action_verb_detection(self):
        self.assertTrue(starts_with_action_verb("   led the migration"))
        self.assertTrue(starts_with_action_verb("MANAGED a team"))
        self.assertFalse(starts_with_action_verb("Responsible for deployments"))

    def test_metric_detection(self):
        self.assertTrue(has_metric("Increased revenue 20%"))
        self.assertTrue(has_metric("Saved $300 per month"))
        self.assertTrue(has_metric("Supported 1,200 users"))
        self.assertTrue(has_metric("Onboarded 40 team members"))
        self.assertFalse(has_metric("Grew ARR 3x"))
        self.assertFalse(has_metric("Worked on internal tooling"))

    def test_strong_bullets_score_full(self):
        self.assertEqual(content_score(strong_resume()), 100)

    def test_no_bullets_counts_as_zero_ratios(self):
        self.assertEqual(content_score(ResumeDocument()), 45)

    def test_penalties_stack(self):
        bullets = (
            ["Led rollout of 30% more services"] * 3
            + ["Built tooling for support"]
            + ["Handled on-call rotations"] * 6
        )
        # action ratio 0.4, metric ratio 0.3
        self.assertEqual(content_score(bullets_resume(bullets)), 65)

        bullets = ["Led rollout of 30% more services"] + ["Built tooling"] + ["Handled on-call rotations"] * 8
        # action ratio 0.2, metric ratio 0.1
        self.assertEqual(content_score(bullets_resume(bullets)), 45)

    def test_monotonic_as_action_verbs_disappear(self):
        scores = []
        for with_verb in range(10, -1, -1):
            bullets = ["Delivered 10% faster releases"] * with_verb + ["Owned 10% faster releases"] * (10 - with_verb)
            scores.append(content_score(bullets_resume(bullets)))
        for earlier, later in zip(scores, scores[1:]):
            self.assertGreaterEqual(earlier, later)
        self.assertEqual(scores[0], 100)
        self.assertEqual(scores[-1], 70)


class ReadabilityScoreTests(unittest.TestCase):
    def test_strong_resume(self):
        self.assertEqual(readability_score(strong_resume()), 100)

    def test_empty_resume(self):
        self.assertEqual(readability_score(ResumeDocument()), 80)

    def test_summary_bounds(self):
        bullets = ["b" * 40]
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 100)), 100)
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 500)), 100)
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 501)), 90)
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 99)), 90)

    def test_overlapping_summary_thresholds_apply_both_penalties(self):
        config = copy.deepcopy(get_scoring_config())
        config["readability"]["summary_max_chars"] = 50
        config["readability"]["summary_min_chars"] = 100
        policy = policy_from_config(config)

        bullets = ["b" * 40]
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 75), policy), 80)
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 40), policy), 90)
        self.assertEqual(readability_score(bullets_resume(bullets, summary="s" * 120), policy), 90)

    def test_bullet_length_bounds(self):
        summary = "s" * 150
        self.assertEqual(readability_score(bullets_resume(["b" * 151], summary)), 85)
        self.assertEqual(readability_score(bullets_resume(["b" * 150], summary)), 100)
        self.assertEqual(readability_score(bullets_resume(["b" * 29], summary)), 90)
        self.assertEqual(readability_score(bullets_resume(["b" * 20, "b" * 40], summary)), 100)


class CompletenessScoreTests(unittest.TestCase):
    def test_all_sections(self):
        self.assertEqual(completeness_score(strong_resume()), 100)

    def test_empty(self):
        self.assertEqual(completeness_score(ResumeDocument()), 0)

    def test_partial(self):
        document = ResumeDocument.model_validate({"personalInfo": {"name": "A", "email": "a@b.co"}})
        self.assertEqual(completeness_score(document), 14)
        self.assertEqual(completeness_score(strong_resume(certifications=[], projects=[], summary="short")), 57)

    def test_name_without_email_does_not_count(self):
        document = ResumeDocument.model_validate({"personalInfo": {"name": "A"}})
        self.assertEqual(completeness_score(document), 0)


if __name__ == "__main__":
    unittest.main()
