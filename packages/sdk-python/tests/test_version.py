"""
Tests for version parsing and constraint evaluation.

Tests cover:
- Lenient module version parsing and comparison
- Caret, tilde and comparator semantics
- The 0.x caret policy
- OR groups and AND lists
- Strict constraint parse errors
"""

import pytest

from modresolve_common import ParseError
from modresolve_sdk.dependencies import (
    Comparator,
    Version,
    VersionConstraint,
    VersionOperator,
    compare_versions,
    parse_constraint,
    parse_version,
    satisfies,
)

# ============================================================================
# Version Parsing Tests
# ============================================================================


class TestVersionParsing:
    """Tests for module version parsing."""

    def test_parse_simple_version(self):
        assert parse_version("1.2.3") == Version(1, 2, 3)

    def test_parse_version_without_patch(self):
        assert parse_version("1.2") == Version(1, 2, 0)

    def test_parse_version_major_only(self):
        assert parse_version("2") == Version(2, 0, 0)

    def test_leading_v_dropped(self):
        assert parse_version("v1.4.0") == Version(1, 4, 0)

    def test_suffix_keeps_leading_digits(self):
        """1.2.3-beta reads as 1.2.3"""
        assert parse_version("1.2.3-beta") == Version(1, 2, 3)

    def test_non_numeric_segment_is_zero(self):
        assert parse_version("1.x.5") == Version(1, 0, 5)

    def test_extra_segments_ignored(self):
        assert parse_version("1.2.3.4") == Version(1, 2, 3)

    def test_str(self):
        assert str(parse_version("3")) == "3.0.0"


class TestVersionComparison:
    """Numeric comparison."""

    @pytest.mark.parametrize(
        "left,right,expected",
        [
            ("1.0.0", "1.0.0", 0),
            ("1.0", "1.0.0", 0),
            ("1.10.0", "1.9.0", 1),
            ("0.9.9", "1.0.0", -1),
            ("v2.0.0", "2.0.0", 0),
        ],
    )
    def test_compare_versions(self, left, right, expected):
        assert compare_versions(left, right) == expected

    def test_ordering_operators(self):
        assert Version(1, 2, 3) < Version(1, 3, 0)
        assert Version(2, 0, 0) >= Version(2, 0, 0)
        assert Version(0, 0, 1) <= Version(0, 0, 2)
        assert Version(1, 0, 0) > Version(0, 99, 99)


# ============================================================================
# Constraint Tests
# ============================================================================


class TestWildcard:
    """The * constraint."""

    def test_wildcard_matches_anything(self):
        constraint = VersionConstraint.parse("*")
        assert constraint.is_wildcard
        assert constraint.satisfied_by("0.0.1")
        assert constraint.satisfied_by("99.0.0")

    def test_any_factory(self):
        assert VersionConstraint.any().satisfied_by("0.0.0")
        assert str(VersionConstraint.any()) == "*"

    def test_wildcard_or_branch(self):
        assert VersionConstraint.parse("^1.0 || *").is_wildcard


class TestCaret:
    """Caret ranges."""

    def test_caret_same_major(self):
        constraint = VersionConstraint.parse("^1.2.3")
        assert constraint.satisfied_by("1.2.3")
        assert constraint.satisfied_by("1.5.0")
        assert not constraint.satisfied_by("2.0.0")
        assert not constraint.satisfied_by("1.2.2")

    def test_caret_missing_segments_are_zero(self):
        constraint = VersionConstraint.parse("^1.0")
        assert constraint.satisfied_by("1.0.0")
        assert constraint.satisfied_by("1.99.0")
        assert not constraint.satisfied_by("0.9.0")

    def test_caret_zero_minor_is_exact_minor(self):
        constraint = VersionConstraint.parse("^0.2.3")
        assert constraint.satisfied_by("0.2.3")
        assert constraint.satisfied_by("0.2.9")
        assert not constraint.satisfied_by("0.3.0")
        assert not constraint.satisfied_by("1.0.0")

    def test_caret_zero_zero_is_exact_patch(self):
        constraint = VersionConstraint.parse("^0.0.3")
        assert constraint.satisfied_by("0.0.3")
        assert not constraint.satisfied_by("0.0.4")
        assert not constraint.satisfied_by("0.1.0")

    def test_upper_bounds(self):
        assert Comparator(VersionOperator.CARET, Version(1, 2, 3)).upper_bound() == Version(2, 0, 0)
        assert Comparator(VersionOperator.CARET, Version(0, 2, 3)).upper_bound() == Version(0, 3, 0)
        assert Comparator(VersionOperator.CARET, Version(0, 0, 3)).upper_bound() == Version(0, 0, 4)

    def test_upper_bound_undefined_for_comparators(self):
        with pytest.raises(ValueError):
            Comparator(VersionOperator.GE, Version(1, 0, 0)).upper_bound()


class TestTilde:
    """Tilde ranges depend on how many segments were written."""

    def test_tilde_full_version_locks_minor(self):
        constraint = VersionConstraint.parse("~1.2.3")
        assert constraint.satisfied_by("1.2.9")
        assert not constraint.satisfied_by("1.3.0")
        assert not constraint.satisfied_by("1.2.2")

    def test_tilde_two_segments_locks_major(self):
        constraint = VersionConstraint.parse("~1.2")
        assert constraint.satisfied_by("1.9.0")
        assert not constraint.satisfied_by("2.0.0")
        assert not constraint.satisfied_by("1.1.0")

    def test_tilde_major_only(self):
        constraint = VersionConstraint.parse("~1")
        assert constraint.satisfied_by("1.4.0")
        assert not constraint.satisfied_by("2.0.0")

    def test_tilde_written_zero_patch_locks_minor(self):
        constraint = VersionConstraint.parse("~1.2.0")
        assert constraint.satisfied_by("1.2.5")
        assert not constraint.satisfied_by("1.3.0")


class TestHyphenRange:
    """``A - B`` is an inclusive range."""

    def test_bounds_inclusive(self):
        constraint = VersionConstraint.parse("1.0.0 - 2.0.0")
        assert constraint.satisfied_by("1.0.0")
        assert constraint.satisfied_by("1.5.3")
        assert constraint.satisfied_by("2.0.0")
        assert not constraint.satisfied_by("2.0.1")
        assert not constraint.satisfied_by("0.9.9")

    def test_expands_to_comparators(self):
        group = VersionConstraint.parse("1.2 - 3").groups[0]
        assert [str(c) for c in group] == [">=1.2.0", "<=3.0.0"]

    def test_inside_or_branch(self):
        constraint = VersionConstraint.parse("1.0.0 - 1.4.0 || ^3.0")
        assert constraint.satisfied_by("1.4.0")
        assert constraint.satisfied_by("3.1.0")
        assert not constraint.satisfied_by("2.0.0")

    def test_combined_with_comparator(self):
        constraint = VersionConstraint.parse("1.0.0 - 2.0.0 <1.5.0")
        assert constraint.satisfied_by("1.4.0")
        assert not constraint.satisfied_by("1.6.0")

    @pytest.mark.parametrize(
        "expression",
        ["1.0.0 -", "- 2.0.0", "1.0.0 - - 2.0.0", ">=1.0.0 - 2.0.0", "1.0.0 - ^2.0.0"],
    )
    def test_malformed_ranges(self, expression):
        with pytest.raises(ParseError):
            VersionConstraint.parse(expression)


class TestComparators:
    """Explicit bounds."""

    @pytest.mark.parametrize(
        "expression,version,expected",
        [
            ("=1.0.0", "1.0.0", True),
            ("=1.0.0", "1.0.1", False),
            ("1.0.0", "1.0.0", True),
            ("1.0", "1.0.0", True),
            (">1.0.0", "1.0.1", True),
            (">1.0.0", "1.0.0", False),
            (">=1.0.0", "1.0.0", True),
            ("<2.0.0", "1.9.9", True),
            ("<2.0.0", "2.0.0", False),
            ("<=2.0.0", "2.0.0", True),
        ],
    )
    def test_single_comparator(self, expression, version, expected):
        assert satisfies(version, expression) is expected

    def test_and_list(self):
        constraint = VersionConstraint.parse(">=2.0.0 <3.0.0")
        assert constraint.satisfied_by("2.5.0")
        assert not constraint.satisfied_by("3.0.0")
        assert not constraint.satisfied_by("1.9.0")

    def test_or_groups(self):
        constraint = VersionConstraint.parse("^1.0 || >=3.0.0 <4.0.0")
        assert constraint.satisfied_by("1.3.0")
        assert constraint.satisfied_by("3.2.0")
        assert not constraint.satisfied_by("2.0.0")
        assert len(constraint.groups) == 2

    def test_constraint_version_suffix_ignored_for_ordering(self):
        assert satisfies("1.0.0", ">=1.0.0-rc.1")

    def test_satisfied_by_accepts_version_object(self):
        assert VersionConstraint.parse("^2.0").satisfied_by(Version(2, 1, 0))

    def test_expression_kept_stripped(self):
        assert str(VersionConstraint.parse("  ^1.0  ")) == "^1.0"

    def test_precision_recorded(self):
        comparator = VersionConstraint.parse("~1.2").groups[0][0]
        assert comparator.operator == VersionOperator.TILDE
        assert comparator.precision == 2
        assert str(comparator) == "~1.2.0"


class TestParseErrors:
    """Constraint expressions are parsed strictly."""

    @pytest.mark.parametrize(
        "expression",
        [
            "",
            "   ",
            ">=",
            "^",
            "latest",
            "1.2.3.4",
            ">= 1.0",
            "^1.0 ||",
            "|| ^1.0",
            "* >=1.0",
            "=>1.0",
        ],
    )
    def test_invalid_expressions(self, expression):
        with pytest.raises(ParseError):
            VersionConstraint.parse(expression)

    def test_error_carries_expression(self):
        with pytest.raises(ParseError) as exc_info:
            VersionConstraint.parse(">=abc")
        assert exc_info.value.expression == ">=abc"
        assert "abc" in exc_info.value.reason

    def test_non_string_rejected(self):
        with pytest.raises(ParseError):
            VersionConstraint.parse(5)


class TestParseConstraint:
    """parse_constraint passes parsed constraints through."""

    def test_passthrough(self):
        constraint = VersionConstraint.parse("^1.0")
        assert parse_constraint(constraint) is constraint

    def test_parses_strings(self):
        assert parse_constraint(">=1.0").satisfied_by("1.1.0")
