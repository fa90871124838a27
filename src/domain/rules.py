import math
from typing import List, Optional, Sequence

from .models import (
    AnalysisResult,
    PatientProfile,
    SeverityLevel,
    SignCategory,
    SignRecord,
    as_number,
)


WEIGHT_MULTIPLIER = 10
NORMALIZATION_DIVISOR = 3
PHENOTYPE_CEILING = 95  # phenotype alone never reaches a definitive 100

DIAGNOSTIC_THRESHOLD = 60.0  # mmol/L
INTERMEDIATE_THRESHOLD = 30.0  # mmol/L

CBAVD_SIGN_ID = "cbavd"

RECOMMENDATIONS = {
    "referral": "Diagnostic threshold met (≥60 mmol/L). Proceed to CF care center referral.",
    "sequencing": "Intermediate sweat chloride (30-59 mmol/L). Genetic sequencing (CFTR) strongly recommended.",
    "sweat_test": "Perform Sweat Chloride Test immediately (Gold Standard).",
    "pancreatic": "Assess pancreatic function (fecal elastase).",
    "cbavd_genetics": "CFTR genetic analysis recommended for CBAVD etiology.",
    "monitor": "Monitor growth and respiratory status closely.",
}


def match_signs(sign_ids: Sequence[str], catalog: Sequence[SignRecord]) -> List[SignRecord]:
    """Catalog entries whose id was selected, in catalog order. Unknown ids are dropped."""
    selected = set(sign_ids or [])
    return [s for s in catalog if s.id in selected]


def normalize_phenotype_score(raw_score: float) -> int:
    # Half-up rounding; round() would round halves to even
    return min(int(math.floor(raw_score / NORMALIZATION_DIVISOR + 0.5)), PHENOTYPE_CEILING)


def phenotype_severity(red_flags: int, score: int) -> SeverityLevel:
    if red_flags >= 2 or score > 70:
        return SeverityLevel.HIGH
    if red_flags == 1 or score > 40:
        return SeverityLevel.MODERATE
    return SeverityLevel.LOW


def dedupe(items: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(items))


def analyze(profile: PatientProfile, catalog: Sequence[SignRecord]) -> AnalysisResult:
    signs = match_signs(profile.sign_ids, catalog)
    sweat: Optional[float] = as_number(profile.sweat_chloride)

    score = 0
    severity = SeverityLevel.LOW
    recommendations: List[str] = []

    # 1. Sweat test (definitive)
    if sweat is not None:
        if sweat >= DIAGNOSTIC_THRESHOLD:
            score = 100
            severity = SeverityLevel.CRITICAL
            recommendations.append(RECOMMENDATIONS["referral"])
        elif sweat >= INTERMEDIATE_THRESHOLD:
            score = 75
            severity = SeverityLevel.HIGH
            recommendations.append(RECOMMENDATIONS["sequencing"])

    # 2. Phenotype scoring unless the sweat test already maxed the score
    if score < 100:
        raw_score = sum(s.weight * WEIGHT_MULTIPLIER for s in signs)
        red_flags = sum(1 for s in signs if s.is_red_flag)

        phenotype_score = normalize_phenotype_score(raw_score)
        if score == 0:
            score = phenotype_score

        # Overwrites the sweat-test severity, never yields Critical
        severity = phenotype_severity(red_flags, score)

        if score > 20 and sweat is None:
            recommendations.append(RECOMMENDATIONS["sweat_test"])
        if any(s.category == SignCategory.PANCREATIC_GI for s in signs):
            recommendations.append(RECOMMENDATIONS["pancreatic"])
        if profile.is_male and any(s.id == CBAVD_SIGN_ID for s in signs):
            recommendations.append(RECOMMENDATIONS["cbavd_genetics"])
        if not recommendations and score > 10:
            recommendations.append(RECOMMENDATIONS["monitor"])

    return AnalysisResult(
        probability_score=score,
        severity_level=severity,
        matched_signs=signs,
        recommendations=dedupe(recommendations),
    )
