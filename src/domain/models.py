import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class AgeGroup(str, Enum):
    INFANT = "Infant (< 2 years)"
    CHILD = "Child (2-12 years)"
    ADOLESCENT_ADULT = "Adolescent/Adult (> 12 years)"


class SignCategory(str, Enum):
    PULMONARY = "Pulmonary"
    PANCREATIC_GI = "Pancreatic & GI"
    LIVER = "Liver"
    OTHER = "Other Systemic"
    TEST_RESULTS = "Clinical Tests"


class SeverityLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_ORDER = [
    SeverityLevel.LOW,
    SeverityLevel.MODERATE,
    SeverityLevel.HIGH,
    SeverityLevel.CRITICAL,
]


def as_number(value) -> Optional[float]:
    """Return value as a finite float, or None when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def age_group_for(age) -> AgeGroup:
    """Derive the age group used for sign filtering and reporting.

    Unknown or non-numeric ages fall back to the infant group.
    """
    years = as_number(age)
    if years is None:
        return AgeGroup.INFANT
    if years < 2:
        return AgeGroup.INFANT
    if years <= 12:
        return AgeGroup.CHILD
    return AgeGroup.ADOLESCENT_ADULT


class SignRecord(BaseModel):
    id: str
    label: str
    category: SignCategory
    weight: int = Field(..., ge=1, le=10, description="Specificity to CF, 1-10")
    description: str = ""
    age_groups: List[AgeGroup]
    is_red_flag: bool = False

    class Config:
        frozen = True

    @validator("age_groups")
    def validate_age_groups(cls, v: List[AgeGroup]):
        if not v:
            raise ValueError("a sign must apply to at least one age group")
        return v

    def applies_to(self, age_group: AgeGroup) -> bool:
        return age_group in self.age_groups


class PatientProfile(BaseModel):
    age: Optional[float] = Field(None, description="Years; decimals for infants (0.5 = 6 months)")
    is_male: bool = True
    sign_ids: List[str] = []
    sweat_chloride: Optional[float] = Field(None, description="Sweat chloride in mmol/L")

    class Config:
        frozen = True

    @validator("age", "sweat_chloride", pre=True)
    def coerce_number(cls, v):
        return as_number(v)

    @property
    def age_group(self) -> AgeGroup:
        return age_group_for(self.age)


class AnalysisResult(BaseModel):
    probability_score: int = Field(..., ge=0, le=100)
    severity_level: SeverityLevel
    matched_signs: List[SignRecord] = []
    recommendations: List[str] = []

    class Config:
        frozen = True
