"""
Version Parsing and Constraint Evaluation
=========================================

Parses module versions and version-range expressions and checks one against
the other.

Supported constraint grammar:
- ``*``                       any version
- ``^1.2.3``                  same major, >= 1.2.3 (0.x lines: see below)
- ``~1.2.3``                  >= 1.2.3, < 1.3.0 (``~1.2`` / ``~1``: < 2.0.0)
- ``>=2.0.0 <3.0.0``          space-separated comparators, all must hold
- ``1.2.3``                   bare version, exact match
- ``1.2.0 - 2.0.0``           inclusive range, same as ``>=1.2.0 <=2.0.0``
- ``^1.0 || ^2.0``            alternatives, any group may hold

Caret on 0.x lines:
- ``^0.2.3`` means >= 0.2.3, < 0.3.0 (minor is the compatibility boundary)
- ``^0.0.3`` means >= 0.0.3, < 0.0.4 (exact patch)

Module versions are read leniently (missing or non-numeric segments are 0)
but constraint expressions are parsed strictly: anything outside the grammar
raises ParseError instead of matching everything.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from modresolve_common import ParseError, Patterns


class VersionOperator(str, Enum):
    """Version comparison operators."""

    EQ = "="  # Exact match
    GT = ">"  # Greater than
    GE = ">="  # Greater or equal
    LT = "<"  # Less than
    LE = "<="  # Less or equal
    CARET = "^"  # Same major (or minor/patch on 0.x)
    TILDE = "~"  # Same minor when patch is given


@dataclass(frozen=True)
class Version:
    """
    A numeric major.minor.patch version.

    Pre-release and build suffixes are not part of ordering.
    """

    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: "Version") -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: "Version") -> bool:
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: "Version") -> bool:
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: "Version") -> bool:
        return self.as_tuple() >= other.as_tuple()


_LEADING_DIGITS = re.compile(r"^\d+")
_CONSTRAINT_VERSION = re.compile(Patterns.CONSTRAINT_VERSION)
_TOKEN = re.compile(r"^(>=|<=|>|<|=|\^|~)?(.*)$")


def parse_version(version_str: str) -> Version:
    """
    Read a module version string.

    Never fails: a leading ``v`` is dropped, the first three dot-separated
    segments are read, and any segment without leading digits (or missing
    altogether) counts as 0. ``"1.2.3-beta"`` reads as 1.2.3, ``"2"`` as 2.0.0.

    Args:
        version_str: Version string like "1.0.0", "2.5", "v1.2.3-rc1"

    Returns:
        Version object
    """
    text = version_str.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]

    numbers = []
    for segment in text.split(".")[:3]:
        match = _LEADING_DIGITS.match(segment)
        numbers.append(int(match.group(0)) if match else 0)
    while len(numbers) < 3:
        numbers.append(0)

    return Version(*numbers)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing two version strings numerically."""
    a, b = parse_version(left), parse_version(right)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


@dataclass(frozen=True)
class Comparator:
    """
    One token of a constraint expression, e.g. ``>=1.2.0`` or ``^2.1``.

    ``precision`` is how many version segments were written (1-3); tilde
    ranges depend on it.
    """

    operator: VersionOperator
    version: Version
    precision: int = 3

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"

    def upper_bound(self) -> Version:
        """Exclusive upper bound for caret and tilde operators."""
        v = self.version
        if self.operator == VersionOperator.CARET:
            if v.major > 0:
                return Version(v.major + 1, 0, 0)
            if v.minor > 0:
                return Version(0, v.minor + 1, 0)
            return Version(0, 0, v.patch + 1)
        if self.operator == VersionOperator.TILDE:
            if self.precision >= 3:
                return Version(v.major, v.minor + 1, 0)
            return Version(v.major + 1, 0, 0)
        raise ValueError(f"Operator {self.operator.value} has no range upper bound")

    def is_satisfied_by(self, version: Version) -> bool:
        """Check if a version satisfies this comparator."""
        if self.operator == VersionOperator.EQ:
            return version.as_tuple() == self.version.as_tuple()
        elif self.operator == VersionOperator.GT:
            return version > self.version
        elif self.operator == VersionOperator.GE:
            return version >= self.version
        elif self.operator == VersionOperator.LT:
            return version < self.version
        elif self.operator == VersionOperator.LE:
            return version <= self.version
        elif self.operator in (VersionOperator.CARET, VersionOperator.TILDE):
            return self.version <= version < self.upper_bound()
        return False


def _parse_comparator(token: str, expression: str) -> Comparator:
    match = _TOKEN.match(token)
    operator_text, version_text = match.group(1), match.group(2)

    if not version_text:
        raise ParseError(expression, f"operator '{operator_text}' has no version")

    version_match = _CONSTRAINT_VERSION.match(version_text)
    if not version_match:
        raise ParseError(expression, f"'{version_text}' is not a valid version")

    segments = [g for g in version_match.groups() if g is not None]
    numbers = [int(s) for s in segments] + [0] * (3 - len(segments))
    operator = VersionOperator(operator_text) if operator_text else VersionOperator.EQ

    return Comparator(operator=operator, version=Version(*numbers), precision=len(segments))


def _parse_bound(token: str, expression: str) -> Comparator:
    if token[:1] in "<>=^~":
        raise ParseError(expression, f"range bound '{token}' must be a plain version")
    return _parse_comparator(token, expression)


def _parse_group(tokens: List[str], expression: str) -> Tuple[Comparator, ...]:
    comparators = []
    i = 0
    while i < len(tokens):
        if tokens[i] == "-":
            raise ParseError(expression, "'-' range needs a version on both sides")
        if i + 1 < len(tokens) and tokens[i + 1] == "-":
            if i + 2 >= len(tokens) or tokens[i + 2] == "-":
                raise ParseError(expression, "'-' range needs a version on both sides")
            low = _parse_bound(tokens[i], expression)
            high = _parse_bound(tokens[i + 2], expression)
            comparators.append(Comparator(VersionOperator.GE, low.version, low.precision))
            comparators.append(Comparator(VersionOperator.LE, high.version, high.precision))
            i += 3
            continue
        comparators.append(_parse_comparator(tokens[i], expression))
        i += 1
    return tuple(comparators)


@dataclass(frozen=True)
class VersionConstraint:
    """
    A parsed version-range expression.

    ``groups`` holds the ``||`` alternatives; each group is a tuple of
    comparators that must all hold. An empty group is the wildcard.
    Construct through ``VersionConstraint.parse``.
    """

    expression: str
    groups: Tuple[Tuple[Comparator, ...], ...]

    @classmethod
    def parse(cls, expression: str) -> "VersionConstraint":
        """
        Parse a constraint expression.

        Raises:
            ParseError: If the expression is empty or outside the grammar
        """
        if not isinstance(expression, str):
            raise ParseError(repr(expression), "constraint must be a string")

        text = expression.strip()
        if not text:
            raise ParseError(expression, "expression is empty")

        groups = []
        for branch in text.split("||"):
            tokens = branch.split()
            if not tokens:
                raise ParseError(expression, "empty alternative around '||'")
            if tokens == ["*"]:
                groups.append(())
                continue
            if "*" in tokens:
                raise ParseError(expression, "'*' cannot be combined with other comparators")
            groups.append(_parse_group(tokens, expression))

        return cls(expression=text, groups=tuple(groups))

    @classmethod
    def any(cls) -> "VersionConstraint":
        return cls(expression="*", groups=((),))

    @property
    def is_wildcard(self) -> bool:
        return any(len(group) == 0 for group in self.groups)

    def satisfied_by(self, version: Union[str, Version]) -> bool:
        """Check whether a concrete version satisfies this constraint."""
        if isinstance(version, str):
            version = parse_version(version)
        return any(
            all(comparator.is_satisfied_by(version) for comparator in group)
            for group in self.groups
        )

    def __str__(self) -> str:
        return self.expression


def parse_constraint(expression: Union[str, VersionConstraint]) -> VersionConstraint:
    """Parse an expression, passing already-parsed constraints through."""
    if isinstance(expression, VersionConstraint):
        return expression
    return VersionConstraint.parse(expression)


def satisfies(version: str, expression: str) -> bool:
    """Convenience check: does ``version`` satisfy the ``expression``?"""
    return VersionConstraint.parse(expression).satisfied_by(version)
