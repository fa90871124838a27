import logging
from typing import Iterable, List, Optional

from src.application.ports import CatalogPort
from src.application.schemas import InvestigationReport, ProgressionStage
from src.domain.catalog import PROGRESSION_BY_AGE_GROUP, signs_for_age_group
from src.domain.models import PatientProfile, SignRecord, age_group_for, as_number
from src.domain.rules import DIAGNOSTIC_THRESHOLD, INTERMEDIATE_THRESHOLD, analyze


logger = logging.getLogger(__name__)


def parse_number(raw) -> Optional[float]:
    """Best-effort parse of a numeric form field. Returns None when blank or not a number."""
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
        if not raw:
            return None
    return as_number(raw)


def build_profile(age, is_male: bool, sign_ids: Iterable[str], sweat_chloride=None) -> PatientProfile:
    return PatientProfile(
        age=parse_number(age),
        is_male=bool(is_male),
        sign_ids=list(dict.fromkeys(sign_ids or [])),
        sweat_chloride=parse_number(sweat_chloride),
    )


def interpret_sweat_chloride(value: Optional[float]) -> str:
    if value is None:
        return "Sweat chloride test not performed."
    if value >= DIAGNOSTIC_THRESHOLD:
        return f"{value:g} mmol/L: CF diagnosis confirmed (≥60 mmol/L)."
    if value >= INTERMEDIATE_THRESHOLD:
        return f"{value:g} mmol/L: Possible CF, further analysis required (30-59 mmol/L)."
    return f"{value:g} mmol/L: CF unlikely (≤29 mmol/L)."


class InvestigationUseCase:
    def __init__(self, catalog_provider: CatalogPort):
        self.catalog_provider = catalog_provider

    def catalog(self) -> List[SignRecord]:
        return self.catalog_provider.load_signs()

    def available_signs(self, age) -> List[SignRecord]:
        """Signs offered for selection at the given age."""
        return signs_for_age_group(self.catalog(), age_group_for(parse_number(age)))

    def investigate(self, profile: PatientProfile) -> InvestigationReport:
        catalog = self.catalog()
        known_ids = {s.id for s in catalog}
        unknown = [sid for sid in profile.sign_ids if sid not in known_ids]
        if unknown:
            logger.warning("Ignoring sign ids not in catalog: %s", ", ".join(unknown))

        result = analyze(profile, catalog)
        age_group = profile.age_group
        logger.info(
            "Investigation complete: age_group=%s signs=%d score=%d severity=%s",
            age_group.value,
            len(result.matched_signs),
            result.probability_score,
            result.severity_level.value,
        )

        progression = [
            ProgressionStage(age_group=group, manifestations=items, is_current=group == age_group)
            for group, items in PROGRESSION_BY_AGE_GROUP.items()
        ]
        return InvestigationReport(
            profile=profile,
            age_group=age_group,
            result=result,
            sweat_chloride_interpretation=interpret_sweat_chloride(profile.sweat_chloride),
            progression=progression,
            unknown_sign_ids=unknown,
        )
