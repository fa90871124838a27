import logging
import pytest

from src.application.schemas import InvestigationReport
from src.application.use_cases import (
    InvestigationUseCase,
    build_profile,
    interpret_sweat_chloride,
    parse_number,
)
from src.domain.catalog import SIGN_CATALOG
from src.domain.models import AgeGroup, SeverityLevel


class DummyCatalog:
    def __init__(self, signs=None):
        self.signs = list(SIGN_CATALOG if signs is None else signs)
        self.calls = 0

    def load_signs(self):
        self.calls += 1
        return list(self.signs)


@pytest.mark.parametrize("raw,expected", [
    ("45", 45.0),
    (" 0.5 ", 0.5),
    ("1,5", 1.5),
    ("", None),
    ("   ", None),
    (None, None),
    ("abc", None),
    ("nan", None),
    (12, 12.0),
])
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_build_profile_from_form_input():
    profile = build_profile("0.5", False, ["meconium_ileus", "meconium_ileus"], "")
    assert profile.age == 0.5
    assert profile.is_male is False
    assert profile.sign_ids == ["meconium_ileus"]
    assert profile.sweat_chloride is None
    assert profile.age_group == AgeGroup.INFANT


def test_interpret_sweat_chloride():
    assert "not performed" in interpret_sweat_chloride(None)
    assert "confirmed" in interpret_sweat_chloride(60)
    assert "Possible CF" in interpret_sweat_chloride(45)
    assert "unlikely" in interpret_sweat_chloride(12)


def test_investigate_returns_report():
    usecase = InvestigationUseCase(catalog_provider=DummyCatalog())
    profile = build_profile("0.5", True, ["meconium_ileus", "failure_to_thrive"])
    report = usecase.investigate(profile)
    assert isinstance(report, InvestigationReport)
    assert report.age_group == AgeGroup.INFANT
    assert report.result.probability_score == 60
    assert report.result.severity_level == SeverityLevel.HIGH
    assert "not performed" in report.sweat_chloride_interpretation
    current = [stage.age_group for stage in report.progression if stage.is_current]
    assert current == [AgeGroup.INFANT]
    assert len(report.progression) == 3


def test_investigate_logs_unknown_sign_ids(caplog):
    usecase = InvestigationUseCase(catalog_provider=DummyCatalog())
    profile = build_profile("30", True, ["salty_skin", "made_up"])
    with caplog.at_level(logging.WARNING, logger="src.application.use_cases"):
        report = usecase.investigate(profile)
    assert report.unknown_sign_ids == ["made_up"]
    assert [s.id for s in report.result.matched_signs] == ["salty_skin"]
    assert "made_up" in caplog.text


def test_available_signs_filters_by_age():
    usecase = InvestigationUseCase(catalog_provider=DummyCatalog())
    adult_ids = [s.id for s in usecase.available_signs("40")]
    infant_ids = [s.id for s in usecase.available_signs("")]
    assert "cbavd" in adult_ids
    assert "meconium_ileus" not in adult_ids
    # Unknown age falls back to the infant list
    assert "meconium_ileus" in infant_ids


def test_investigate_with_definitive_lab():
    usecase = InvestigationUseCase(catalog_provider=DummyCatalog())
    report = usecase.investigate(build_profile("5", False, [], "72"))
    assert report.result.probability_score == 100
    assert report.result.severity_level == SeverityLevel.CRITICAL
    assert report.profile.sweat_chloride == 72.0


def test_available_signs_accepts_comma_decimal():
    usecase = InvestigationUseCase(catalog_provider=DummyCatalog())
    ids = [s.id for s in usecase.available_signs("12,5")]
    assert "cbavd" in ids
