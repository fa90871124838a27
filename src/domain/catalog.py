"""Static reference data: the CF sign catalog and the educational text shown in reports."""
from typing import Dict, Iterable, List, Sequence

from .models import AgeGroup, SignCategory, SignRecord


_ALL_AGES = [AgeGroup.INFANT, AgeGroup.CHILD, AgeGroup.ADOLESCENT_ADULT]
_CHILD_UP = [AgeGroup.CHILD, AgeGroup.ADOLESCENT_ADULT]
_UP_TO_CHILD = [AgeGroup.INFANT, AgeGroup.CHILD]


SIGN_CATALOG: List[SignRecord] = [
    # Pulmonary
    SignRecord(
        id="freq_lung_infections",
        label="Frequent Lung Infections",
        category=SignCategory.PULMONARY,
        weight=7,
        description=(
            "Recurrent infections caused by thick, sticky mucus trapping bacteria. "
            "Common pathogens include Pseudomonas aeruginosa."
        ),
        age_groups=_ALL_AGES,
        is_red_flag=True,
    ),
    SignRecord(
        id="chronic_inflammation",
        label="Chronic Airway Inflammation",
        category=SignCategory.PULMONARY,
        weight=6,
        description="Persistent inflammation leading to progressive lung disease and reduced function.",
        age_groups=_CHILD_UP,
    ),
    SignRecord(
        id="nasal_polyps",
        label="Nasal Polyps",
        category=SignCategory.PULMONARY,
        weight=8,
        description="Soft, painless, noncancerous growths on the lining of nasal passages or sinuses.",
        age_groups=_CHILD_UP,
        is_red_flag=True,
    ),
    SignRecord(
        id="sinusitis",
        label="Chronic Sinusitis",
        category=SignCategory.PULMONARY,
        weight=5,
        description="Inflammation or swelling of the tissue lining the sinuses.",
        age_groups=_CHILD_UP,
    ),
    SignRecord(
        id="bronchiectasis",
        label="Bronchiectasis",
        category=SignCategory.PULMONARY,
        weight=9,
        description=(
            "Damage to the airways causing them to widen and become flabby and scarred. "
            "~1/3 of preschool-aged children with CF may show signs."
        ),
        age_groups=_CHILD_UP,
        is_red_flag=True,
    ),
    SignRecord(
        id="abpa",
        label="Allergic Bronchopulmonary Aspergillosis (ABPA)",
        category=SignCategory.PULMONARY,
        weight=7,
        description="A heightened reaction to fungi in the environment, often appearing in childhood.",
        age_groups=_CHILD_UP,
    ),
    # Pancreatic & GI
    SignRecord(
        id="meconium_ileus",
        label="Meconium Ileus (Bowel Obstruction)",
        category=SignCategory.PANCREATIC_GI,
        weight=10,
        description="Bowel obstruction occurring in neonates. Presents in up to 20% of infants with CF.",
        age_groups=[AgeGroup.INFANT],
        is_red_flag=True,
    ),
    SignRecord(
        id="failure_to_thrive",
        label="Failure to Thrive / Poor Weight Gain",
        category=SignCategory.PANCREATIC_GI,
        weight=8,
        description=(
            "Inability to gain weight despite good appetite, often due to exocrine "
            "pancreatic insufficiency."
        ),
        age_groups=_UP_TO_CHILD,
        is_red_flag=True,
    ),
    SignRecord(
        id="pancreatic_insufficiency",
        label="Pancreatic Insufficiency",
        category=SignCategory.PANCREATIC_GI,
        weight=9,
        description=(
            ">85% of infants with CF are pancreatic insufficient from birth or develop it "
            "within the first year."
        ),
        age_groups=_ALL_AGES,
        is_red_flag=True,
    ),
    SignRecord(
        id="constipation",
        label="Chronic Constipation / DIOS",
        category=SignCategory.PANCREATIC_GI,
        weight=5,
        description="Distal Intestinal Obstruction Syndrome (DIOS) or severe constipation.",
        age_groups=_ALL_AGES,
    ),
    SignRecord(
        id="cfrd",
        label="Cystic Fibrosis-Related Diabetes (CFRD)",
        category=SignCategory.PANCREATIC_GI,
        weight=9,
        description="A unique type of diabetes caused by scarring of the pancreas.",
        age_groups=[AgeGroup.ADOLESCENT_ADULT],
        is_red_flag=True,
    ),
    SignRecord(
        id="fat_malabsorption",
        label="Fat Malabsorption (Greasy Stools)",
        category=SignCategory.PANCREATIC_GI,
        weight=7,
        description="Result of enzyme deficiency, leading to nutritional deficiencies (Vit A, D, E, K).",
        age_groups=_UP_TO_CHILD,
    ),
    # Liver
    SignRecord(
        id="prolonged_jaundice",
        label="Prolonged Neonatal Jaundice",
        category=SignCategory.LIVER,
        weight=4,
        description="Associated with cholestasis or bile duct obstruction.",
        age_groups=[AgeGroup.INFANT],
    ),
    SignRecord(
        id="liver_disease",
        label="Liver Disease / Cirrhosis",
        category=SignCategory.LIVER,
        weight=6,
        description="Blocked bile ducts can lead to liver damage and cirrhosis over time.",
        age_groups=_CHILD_UP,
    ),
    # Other systemic
    SignRecord(
        id="salty_skin",
        label="Salty Skin / Chloride in Sweat",
        category=SignCategory.OTHER,
        weight=10,
        description="Abnormally high concentration of chloride in sweat due to CFTR dysfunction.",
        age_groups=_ALL_AGES,
        is_red_flag=True,
    ),
    SignRecord(
        id="cbavd",
        label="Male Infertility (CBAVD)",
        category=SignCategory.OTHER,
        weight=10,
        description="Congenital Bilateral Absence of the Vas Deferens. Almost universal in males with CF.",
        age_groups=[AgeGroup.ADOLESCENT_ADULT],
        is_red_flag=True,
    ),
]


EDUCATIONAL_CONTENT: Dict[str, str] = {
    "early_impact": (
        "CF organ damage can begin early in life. Lung damage can be observed on MRI and CT "
        "scans in early infancy and may occur before loss of lung function is detected. Most "
        "children with CF develop small airway dysfunction within the first 3 months of life."
    ),
    "diagnostic_criteria": (
        "Diagnosis is a multistep process based on:\n"
        "1. Clinical presentation (phenotype).\n"
        "2. Sweat chloride testing.\n"
        "3. Genetic testing (2 CFTR mutations)."
    ),
    "sweat_chloride_guide": (
        "Sweat Chloride Interpretation:\n"
        "• ≥60 mmol/L: CF Diagnosis confirmed.\n"
        "• 30-59 mmol/L: Possible CF, further analysis required.\n"
        "• ≤29 mmol/L: CF unlikely."
    ),
    "importance": (
        "Early childhood is a pivotal period for interventions. Detecting and treating "
        "CF-related manifestations at a young age could:\n"
        "• Support nutritional status.\n"
        "• Improve respiratory outcomes.\n"
        "• Postpone Pseudomonas aeruginosa infection.\n"
        "• Extend survival."
    ),
}


# Typical manifestations by life stage, shown in the report's progression section
PROGRESSION_BY_AGE_GROUP: Dict[AgeGroup, List[str]] = {
    AgeGroup.INFANT: [
        "Lung infection & inflammation",
        "Meconium ileus",
        "Pancreatic insufficiency",
        "Obstructed pancreatic ducts",
    ],
    AgeGroup.CHILD: [
        "ABPA (Fungal reaction)",
        "Chronic Pancreatitis",
        "Liver Disease",
        "Distal Intestinal Obstruction",
    ],
    AgeGroup.ADOLESCENT_ADULT: [
        "Advanced Lung Damage",
        "CF-Related Diabetes",
        "Liver Failure / Cirrhosis",
        "Fertility Issues (CBAVD)",
    ],
}


# Clinical Tests is never offered as a selectable sign
SELECTABLE_CATEGORIES = [
    SignCategory.PULMONARY,
    SignCategory.PANCREATIC_GI,
    SignCategory.LIVER,
    SignCategory.OTHER,
]


def validate_catalog(catalog: Sequence[SignRecord]) -> None:
    seen = set()
    for sign in catalog:
        if sign.id in seen:
            raise ValueError(f"Duplicate sign id in catalog: {sign.id}")
        seen.add(sign.id)


def signs_for_age_group(catalog: Iterable[SignRecord], age_group: AgeGroup) -> List[SignRecord]:
    return [s for s in catalog if s.applies_to(age_group)]


def group_by_category(
    signs: Iterable[SignRecord],
    categories: Sequence[SignCategory] = tuple(SELECTABLE_CATEGORIES),
) -> Dict[SignCategory, List[SignRecord]]:
    """Group signs by category in the given category order, dropping empty groups."""
    signs = list(signs)
    grouped: Dict[SignCategory, List[SignRecord]] = {}
    for category in categories:
        members = [s for s in signs if s.category == category]
        if members:
            grouped[category] = members
    return grouped


validate_catalog(SIGN_CATALOG)
