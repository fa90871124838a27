"""Form input validation for the patient profile and sign selection."""
import re
from typing import Iterable, Tuple

from src.domain.models import SignRecord


MAX_AGE_YEARS = 120
MAX_SWEAT_CHLORIDE = 200  # mmol/L, well above any physiological reading

_NUMBER_PATTERN = r'^[+-]?(\d+([.,]\d*)?|[.,]\d+)$'


def _is_number(raw: str) -> bool:
    return re.match(_NUMBER_PATTERN, raw) is not None


def validate_age(raw) -> Tuple[bool, str]:
    """
    Validate the patient age field.
    
    Args:
        raw: Age in years as typed (decimals allowed, e.g. 0.5 for 6 months)
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if raw is None or not str(raw).strip():
        return False, "Age is required"
    
    raw = str(raw).strip()
    
    if not _is_number(raw):
        return False, "Age must be a number of years"
    
    age = float(raw.replace(',', '.'))
    
    if age < 0:
        return False, "Age cannot be negative"
    
    if age > MAX_AGE_YEARS:
        return False, f"Age is too high (max {MAX_AGE_YEARS} years)"
    
    return True, ""


def validate_sweat_chloride(raw) -> Tuple[bool, str]:
    """
    Validate the optional sweat chloride result.
    
    An empty value is valid: the test has not been performed.
    
    Args:
        raw: Chloride concentration in mmol/L as typed
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if raw is None or not str(raw).strip():
        return True, ""
    
    raw = str(raw).strip()
    
    if not _is_number(raw):
        return False, "Sweat chloride must be a number (mmol/L)"
    
    value = float(raw.replace(',', '.'))
    
    if value < 0:
        return False, "Sweat chloride cannot be negative"
    
    if value > MAX_SWEAT_CHLORIDE:
        return False, f"Sweat chloride is too high (max {MAX_SWEAT_CHLORIDE} mmol/L)"
    
    return True, ""


def validate_sign_ids(sign_ids: Iterable[str], catalog: Iterable[SignRecord]) -> Tuple[bool, str]:
    """
    Check that every selected sign exists in the catalog.
    
    Args:
        sign_ids: Selected sign ids
        catalog: Reference catalog
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    known = {s.id for s in catalog}
    unknown = [sid for sid in sign_ids if sid not in known]
    if unknown:
        return False, f"Unknown sign(s): {', '.join(unknown)}"
    
    return True, ""
