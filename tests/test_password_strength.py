import pytest

from eduplatform.modules.registration.domain.services.password_strength import (
    StrengthLevel,
    evaluate_password_strength,
    strength_level,
)


class TestPasswordStrength:
    """Criteria, percentage and level of the strength report"""

    def test_empty_password_has_no_report(self):
        assert evaluate_password_strength("") is None
        assert evaluate_password_strength(None) is None

    @pytest.mark.parametrize("password, passed", [
        ("a", 1),
        ("aA", 2),
        ("aA1", 3),
        ("aA1!", 4),
        ("aA1!aA1!", 5),
        ("abcdefgh", 2),
        ("        ", 1),
    ])
    def test_percentage_is_share_of_passed_criteria(self, password, passed):
        report = evaluate_password_strength(password)

        assert report.passed_count == passed
        assert report.percentage == passed / 5 * 100

    def test_adding_criteria_never_lowers_the_score(self):
        """Each added character class keeps the percentage non-decreasing"""
        steps = ["a", "ab", "abC", "abC1", "abC1$", "abC1$xyz"]
        scores = [evaluate_password_strength(p).percentage for p in steps]

        assert scores == sorted(scores)

    def test_criteria_keys(self):
        report = evaluate_password_strength("Secret1!")

        assert list(report.criteria) == ["length", "uppercase", "lowercase", "number", "special"]
        assert all(report.criteria.values())
        assert report.failed == []

    def test_special_characters(self):
        for char in "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?":
            assert evaluate_password_strength(char).criteria["special"], char

        assert not evaluate_password_strength("~").criteria["special"]
        assert not evaluate_password_strength("`").criteria["special"]

    @pytest.mark.parametrize("percentage, level", [
        (0, StrengthLevel.WEAK),
        (20, StrengthLevel.WEAK),
        (40, StrengthLevel.WEAK),
        (60, StrengthLevel.FAIR),
        (80, StrengthLevel.GOOD),
        (100, StrengthLevel.STRONG),
    ])
    def test_level_thresholds(self, percentage, level):
        assert strength_level(percentage) == level

    def test_levels_for_passwords(self):
        assert evaluate_password_strength("abc").level == StrengthLevel.WEAK
        assert evaluate_password_strength("abcD1").level == StrengthLevel.FAIR
        assert evaluate_password_strength("abcdefG1").level == StrengthLevel.GOOD
        assert evaluate_password_strength("abcdefG1!").level == StrengthLevel.STRONG

    def test_custom_minimum_length(self):
        assert evaluate_password_strength("abcdef", min_length=6).criteria["length"]
        assert not evaluate_password_strength("abcdef").criteria["length"]
