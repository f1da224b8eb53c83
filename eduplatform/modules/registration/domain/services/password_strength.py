"""
Password strength evaluation for the registration form.

Five independent criteria (length, uppercase, lowercase, digit, symbol);
the percentage is the share of satisfied criteria and the level follows
fixed thresholds. Pure function of the password string.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from eduplatform.shared.utils.validators import PASSWORD_MIN_LENGTH, password_criteria


class StrengthLevel(str, Enum):
    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"


# Upper bound (inclusive) of each level, in percent
LEVEL_THRESHOLDS = (
    (40.0, StrengthLevel.WEAK),
    (60.0, StrengthLevel.FAIR),
    (80.0, StrengthLevel.GOOD),
)


@dataclass(frozen=True)
class PasswordStrengthReport:
    criteria: Dict[str, bool] = field(default_factory=dict)
    percentage: float = 0.0
    level: StrengthLevel = StrengthLevel.WEAK

    @property
    def passed_count(self) -> int:
        return sum(1 for passed in self.criteria.values() if passed)

    @property
    def failed(self) -> List[str]:
        return [key for key, passed in self.criteria.items() if not passed]


def strength_level(percentage: float) -> StrengthLevel:
    for upper_bound, level in LEVEL_THRESHOLDS:
        if percentage <= upper_bound:
            return level
    return StrengthLevel.STRONG


def evaluate_password_strength(
    password: str,
    min_length: int = PASSWORD_MIN_LENGTH
) -> Optional[PasswordStrengthReport]:
    """
    Evaluate a password draft.

    Args:
        password: Password as typed
        min_length: Threshold of the length criterion

    Returns:
        PasswordStrengthReport, or None for an empty password (nothing shown)
    """
    if not password:
        return None

    criteria = password_criteria(password, min_length)
    passed = sum(1 for ok in criteria.values() if ok)
    percentage = passed / len(criteria) * 100

    return PasswordStrengthReport(
        criteria=criteria,
        percentage=percentage,
        level=strength_level(percentage)
    )
