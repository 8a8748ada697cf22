import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scoring.features.experience import (  # noqa: E402
    detect_candidate_level,
    match_experience,
    parse_required_level,
)
from resume_scoring.features.experience_patterns import YearsOfExperienceMatcher  # noqa: E402


class RequiredLevelTests(unittest.TestCase):
    def test_known_levels_and_aliases(self):
        self.assertEqual(parse_required_level("Senior"), 4)
        self.assertEqual(parse_required_level("  lead "), 5)
        self.assertEqual(parse_required_level("Associate"), 2)
        self.assertEqual(parse_required_level("staff"), 6)

    def test_missing_or_unknown_level_defaults_to_mid(self):
        self.assertEqual(parse_required_level(""), 3)
        self.assertEqual(parse_required_level(None), 3)
        self.assertEqual(parse_required_level("wizard"), 3)


class CandidateLevelTests(unittest.TestCase):
    def test_years_statement_maps_to_band(self):
        level, years, signals = detect_candidate_level("5 years of experience in backend services")
        self.assertEqual(level, 4)
        self.assertEqual(years, 5)
        self.assertIn("years:5", signals)

    def test_no_signal_defaults_to_junior(self):
        level, years, signals = detect_candidate_level("I enjoy writing code")
        self.assertEqual(level, 2)
        self.assertEqual(years, 0)
        self.assertEqual(signals, [])

    def test_leadership_title_sets_floor(self):
        level, _, signals = detect_candidate_level("Team lead for the payments squad")
        self.assertEqual(level, 5)
        self.assertTrue(any(signal.startswith("leadership:") for signal in signals))


class ExperienceMatchTests(unittest.TestCase):
    def test_exact_level_match_scores_full(self):
        result = match_experience("senior", "5 years of experience in backend")
        self.assertEqual(result.required_level, "senior")
        self.assertEqual(result.candidate_level, "senior")
        self.assertEqual(result.distance, 0)
        self.assertAlmostEqual(result.score, 1.0)

    def test_score_decays_with_level_distance(self):
        self.assertAlmostEqual(match_experience("mid", "I enjoy writing code").score, 0.85)
        self.assertAlmostEqual(match_experience("senior", "I enjoy writing code").score, 0.65)
        self.assertAlmostEqual(match_experience("lead", "I enjoy writing code").score, 0.45)

    def test_large_distance_hits_floor(self):
        result = match_experience("entry", "Principal engineer")
        self.assertEqual(result.candidate_level, "principal")
        self.assertEqual(result.distance, 5)
        self.assertAlmostEqual(result.score, 0.25)


class YearsOfExperienceMatcherTests(unittest.TestCase):
    def test_finds_common_phrasings(self):
        matcher = YearsOfExperienceMatcher()
        self.assertEqual(matcher.max_years("10+ years building APIs"), 10)
        self.assertEqual(matcher.max_years("Experience: 4 years"), 4)
        self.assertEqual(matcher.max_years("3 years of professional experience"), 3)

    def test_implausible_values_are_ignored(self):
        matcher = YearsOfExperienceMatcher()
        self.assertEqual(matcher.max_years("over 60 years of experience"), 0)
        self.assertEqual(matcher.find(""), [])

    def test_requires_patterns(self):
        with self.assertRaises(ValueError):
            YearsOfExperienceMatcher(patterns=())


if __name__ == "__main__":
    unittest.main()
