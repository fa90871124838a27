"""Unit tests for the reference catalog and domain models."""
import pytest
from pydantic import ValidationError

from src.domain.catalog import (
    PROGRESSION_BY_AGE_GROUP,
    SELECTABLE_CATEGORIES,
    SIGN_CATALOG,
    group_by_category,
    signs_for_age_group,
    validate_catalog,
)
from src.domain.models import (
    AgeGroup,
    PatientProfile,
    SeverityLevel,
    SignCategory,
    SignRecord,
    age_group_for,
)


class TestCatalogInvariants:
    """Test the built-in catalog."""

    def test_sixteen_signs(self):
        assert len(SIGN_CATALOG) == 16

    def test_unique_ids(self):
        ids = [s.id for s in SIGN_CATALOG]
        assert len(ids) == len(set(ids))

    def test_weights_in_range(self):
        assert all(1 <= s.weight <= 10 for s in SIGN_CATALOG)

    def test_every_sign_has_age_group(self):
        assert all(s.age_groups for s in SIGN_CATALOG)

    def test_red_flags(self):
        red_flags = {s.id for s in SIGN_CATALOG if s.is_red_flag}
        assert red_flags == {
            "freq_lung_infections", "nasal_polyps", "bronchiectasis",
            "meconium_ileus", "failure_to_thrive", "pancreatic_insufficiency",
            "cfrd", "salty_skin", "cbavd",
        }

    def test_validate_catalog_rejects_duplicates(self):
        with pytest.raises(ValueError, match="salty_skin"):
            validate_catalog(SIGN_CATALOG + [SIGN_CATALOG[-2]])

    def test_progression_covers_all_age_groups(self):
        assert set(PROGRESSION_BY_AGE_GROUP) == set(AgeGroup)


class TestSignRecord:
    """Test SignRecord validation."""

    def test_weight_out_of_range(self):
        with pytest.raises(ValidationError):
            SignRecord(id="x", label="X", category=SignCategory.LIVER, weight=11,
                       age_groups=[AgeGroup.CHILD])
        with pytest.raises(ValidationError):
            SignRecord(id="x", label="X", category=SignCategory.LIVER, weight=0,
                       age_groups=[AgeGroup.CHILD])

    def test_requires_age_group(self):
        with pytest.raises(ValidationError):
            SignRecord(id="x", label="X", category=SignCategory.LIVER, weight=5, age_groups=[])

    def test_red_flag_defaults_false(self):
        sign = SignRecord(id="x", label="X", category=SignCategory.LIVER, weight=5,
                          age_groups=[AgeGroup.CHILD])
        assert sign.is_red_flag is False

    def test_immutable(self):
        with pytest.raises(ValidationError):
            SIGN_CATALOG[0].weight = 1


class TestAgeGroups:
    """Test age group derivation."""

    @pytest.mark.parametrize("age,expected", [
        (0, AgeGroup.INFANT),
        (0.5, AgeGroup.INFANT),
        (1.99, AgeGroup.INFANT),
        (2, AgeGroup.CHILD),
        (12, AgeGroup.CHILD),
        (12.1, AgeGroup.ADOLESCENT_ADULT),
        (30, AgeGroup.ADOLESCENT_ADULT),
        (None, AgeGroup.INFANT),
        ("abc", AgeGroup.INFANT),
        (float("nan"), AgeGroup.INFANT),
    ])
    def test_age_group_for(self, age, expected):
        assert age_group_for(age) == expected

    def test_profile_age_group(self):
        assert PatientProfile(age=7).age_group == AgeGroup.CHILD
        assert PatientProfile().age_group == AgeGroup.INFANT

    def test_infant_signs(self):
        ids = [s.id for s in signs_for_age_group(SIGN_CATALOG, AgeGroup.INFANT)]
        assert "meconium_ileus" in ids
        assert "prolonged_jaundice" in ids
        assert "cbavd" not in ids
        assert "nasal_polyps" not in ids

    def test_adult_signs(self):
        ids = [s.id for s in signs_for_age_group(SIGN_CATALOG, AgeGroup.ADOLESCENT_ADULT)]
        assert "cbavd" in ids
        assert "cfrd" in ids
        assert "failure_to_thrive" not in ids
        assert "meconium_ileus" not in ids


class TestGroupByCategory:
    """Test category grouping for the sign selector."""

    def test_order_and_empty_groups(self):
        infant_signs = signs_for_age_group(SIGN_CATALOG, AgeGroup.INFANT)
        grouped = group_by_category(infant_signs)
        assert list(grouped) == SELECTABLE_CATEGORIES
        assert [s.id for s in grouped[SignCategory.LIVER]] == ["prolonged_jaundice"]

    def test_clinical_tests_never_offered(self):
        sign = SignRecord(id="t", label="T", category=SignCategory.TEST_RESULTS, weight=5,
                          age_groups=[AgeGroup.CHILD])
        assert group_by_category([sign]) == {}


class TestSeverityOrder:
    """Test the severity tier ordering."""

    def test_total_order(self):
        assert SeverityLevel.LOW < SeverityLevel.MODERATE < SeverityLevel.HIGH < SeverityLevel.CRITICAL
        assert max(SeverityLevel) == SeverityLevel.CRITICAL
        assert SeverityLevel.HIGH >= SeverityLevel.HIGH
