import logging
from typing import List, Optional

from src.application.schemas import InvestigationReport
from src.application.use_cases import InvestigationUseCase, build_profile, parse_number
from src.domain.models import PatientProfile, SignRecord, age_group_for
from src.infrastructure.validators import validate_age, validate_sign_ids, validate_sweat_chloride


logger = logging.getLogger(__name__)


class WizardStageError(Exception):
    """Raised when a wizard action is used outside the stage it belongs to."""


class InvestigationWizard:
    """Drives the three-step investigation flow: profile, sign selection, report."""

    def __init__(self, use_case: InvestigationUseCase):
        self.use_case = use_case
        self.reset()

    def reset(self):
        self.stage = "profile"
        self.age_input = ""
        self.is_male = True
        self.sweat_input = ""
        self.selected_ids: List[str] = []
        self.report: Optional[InvestigationReport] = None

    def _require_stage(self, *stages: str) -> None:
        if self.stage not in stages:
            raise WizardStageError(
                f"Action not available in stage '{self.stage}' (expected {', '.join(stages)})"
            )

    @property
    def age_group(self):
        return age_group_for(parse_number(self.age_input))

    def submit_profile(self, age, is_male: bool, sweat_chloride="") -> List[str]:
        """Store the profile step and advance to sign selection.

        Returns the validation errors; the wizard stays on the profile step if any.
        """
        self._require_stage("profile")
        self.age_input = "" if age is None else str(age)
        self.is_male = bool(is_male)
        self.sweat_input = "" if sweat_chloride is None else str(sweat_chloride)

        errors = []
        for is_valid, error in (validate_age(self.age_input), validate_sweat_chloride(self.sweat_input)):
            if not is_valid:
                errors.append(error)
        if errors:
            return errors

        self.stage = "signs"
        return []

    def available_signs(self) -> List[SignRecord]:
        return self.use_case.available_signs(self.age_input)

    def toggle_sign(self, sign_id: str) -> bool:
        """Select or deselect a sign. Returns True if the sign is now selected."""
        self._require_stage("signs")
        is_valid, error = validate_sign_ids([sign_id], self.use_case.catalog())
        if not is_valid:
            logger.warning("Ignoring sign toggle: %s", error)
            return False
        if sign_id in self.selected_ids:
            self.selected_ids.remove(sign_id)
            return False
        self.selected_ids.append(sign_id)
        return True

    def edit_profile(self):
        self._require_stage("signs")
        self.stage = "profile"

    def current_profile(self) -> PatientProfile:
        return build_profile(self.age_input, self.is_male, self.selected_ids, self.sweat_input)

    def generate_report(self) -> InvestigationReport:
        self._require_stage("signs")
        self.report = self.use_case.investigate(self.current_profile())
        self.stage = "report"
        logger.debug("Wizard advanced to report with %d sign(s)", len(self.selected_ids))
        return self.report
