from typing import List
from pydantic import BaseModel

from src.domain.models import AgeGroup, AnalysisResult, PatientProfile


DISCLAIMER = (
    "This report is a clinical support aid and does not replace professional medical diagnosis."
)


class ProgressionStage(BaseModel):
    age_group: AgeGroup
    manifestations: List[str]
    is_current: bool = False


class InvestigationReport(BaseModel):
    profile: PatientProfile
    age_group: AgeGroup
    result: AnalysisResult
    sweat_chloride_interpretation: str
    progression: List[ProgressionStage] = []
    unknown_sign_ids: List[str] = []
    disclaimer: str = DISCLAIMER
