from .description import DescriptionMatchResult, describe_match
from .experience import ExperienceMatchResult, detect_candidate_level, match_experience, parse_required_level
from .experience_patterns import YearsMention, YearsOfExperienceMatcher
from .keywords import extract_keywords
from .quality import QualityAssessment, assess_quality
from .role import RoleMatchResult, extract_role_terms, match_role
from .similarity import fuzzy_similarity
from .skill_matcher import SkillEvidence, SkillMatchResult, match_skills

__all__ = [
    "extract_keywords",
    "fuzzy_similarity",
    "SkillEvidence",
    "SkillMatchResult",
    "match_skills",
    "DescriptionMatchResult",
    "describe_match",
    "ExperienceMatchResult",
    "YearsMention",
    "YearsOfExperienceMatcher",
    "detect_candidate_level",
    "match_experience",
    "parse_required_level",
    "RoleMatchResult",
    "extract_role_terms",
    "match_role",
    "QualityAssessment",
    "assess_quality",
]
