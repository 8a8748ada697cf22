import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scoring.features.description import describe_match  # noqa: E402


class DescriptionMatchTests(unittest.TestCase):
    def test_missing_inputs_use_fixed_fallbacks(self):
        cases = [
            ("", "", 0.25),
            ("", "Backend engineer", 0.40),
            ("We need a Python engineer", "", 0.15),
            (None, None, 0.25),
        ]
        for job, candidate, expected in cases:
            with self.subTest(job=job, candidate=candidate):
                result = describe_match(job, candidate)
                self.assertAlmostEqual(result.score, expected)
                self.assertTrue(result.fallback_used)

    def test_description_without_keywords_counts_as_missing(self):
        result = describe_match("The and of", "Python engineer")
        self.assertAlmostEqual(result.score, 0.40)
        self.assertTrue(result.fallback_used)

    def test_fraction_of_job_keywords_found(self):
        result = describe_match("Kubernetes Terraform", "Experienced with Kubernetes")
        self.assertEqual(result.total_keywords, 3)
        self.assertEqual(result.matched_keyword_count, 2)
        self.assertEqual(result.matched_keywords, ["kubernetes", "kubernetes terraform"])
        self.assertAlmostEqual(result.score, 2 / 3)
        self.assertFalse(result.fallback_used)

    def test_partial_word_overlap_counts_as_match(self):
        result = describe_match("microservices", "Built microservice platforms")
        self.assertEqual(result.matched_keywords, ["microservices"])
        self.assertAlmostEqual(result.score, 1.0)


if __name__ == "__main__":
    unittest.main()
