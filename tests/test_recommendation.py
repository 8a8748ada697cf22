import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scoring.features import (  # noqa: E402
    DescriptionMatchResult,
    ExperienceMatchResult,
    QualityAssessment,
    RoleMatchResult,
    SkillMatchResult,
)
from resume_scoring.scoring import ScoreBreakdownBuilder, build_recommendation, diagnostic_flags  # noqa: E402


def _breakdown(skills=0.9, description=0.8, role=0.8, experience=0.85, quality=0.5):
    return (
        ScoreBreakdownBuilder()
        .with_skills(SkillMatchResult(score=skills))
        .with_description(DescriptionMatchResult(score=description))
        .with_role(RoleMatchResult(score=role, similarity="high"))
        .with_experience(
            ExperienceMatchResult(score=experience, required_level="mid", candidate_level="senior", distance=1)
        )
        .with_quality(QualityAssessment(score=quality, text_length=0, extraction_used=False))
        .build()
    )


class RecommendationTests(unittest.TestCase):
    def test_band_labels_by_score(self):
        breakdown = _breakdown()
        self.assertEqual(build_recommendation(90, breakdown), "EXCELLENT MATCH - Highly recommended for interview")
        self.assertEqual(build_recommendation(85, breakdown), "EXCELLENT MATCH - Highly recommended for interview")
        self.assertEqual(build_recommendation(70, breakdown), "STRONG CANDIDATE - Recommended for interview")
        self.assertEqual(build_recommendation(55, breakdown), "MODERATE FIT - Consider for phone screening")
        self.assertEqual(build_recommendation(40, breakdown), "WEAK FIT - Review manually")
        self.assertEqual(build_recommendation(0, breakdown), "POOR MATCH - Not recommended")

    def test_weak_factors_append_flags(self):
        breakdown = _breakdown(skills=0.3, experience=0.45, role=0.2)
        self.assertEqual(
            diagnostic_flags(breakdown),
            ["Skills gap identified", "Experience level mismatch", "Role alignment issues"],
        )
        self.assertEqual(
            build_recommendation(30, breakdown),
            "POOR MATCH - Not recommended | Skills gap identified, Experience level mismatch, Role alignment issues",
        )

    def test_builder_requires_every_factor(self):
        builder = ScoreBreakdownBuilder().with_skills(SkillMatchResult(score=0.5))
        with self.assertRaises(ValueError):
            builder.build()

    def test_builder_converts_fractions_to_percent(self):
        breakdown = _breakdown(skills=0.425)
        self.assertAlmostEqual(breakdown.skills.score, 42.5)


if __name__ == "__main__":
    unittest.main()
