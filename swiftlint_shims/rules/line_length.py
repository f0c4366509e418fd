"""
line_length — limit the length of source lines
==============================================

Object literals are verbose by nature, so each ``#colorLiteral(...)`` and
``#imageLiteral(...)`` counts as a single character.  Lines whose UTF-8
byte length is already below the smallest threshold are skipped before
any masking; a character count never exceeds the byte length.
"""

from __future__ import annotations

from typing import List

from ..checkers import Rule, RuleDescription
from ..config import SeverityLevelsConfiguration
from ..diagnostics import StyleViolation, first_exceeded
from ..source import SourceFile

LITERAL_DELIMITERS = ("#colorLiteral", "#imageLiteral")
PLACEHOLDER = "#"

_COLOR_LITERAL = (
    "#colorLiteral(red: 0.9607843161, green: 0.7058823705, "
    "blue: 0.200000003, alpha: 1)"
)
_IMAGE_LITERAL = '#imageLiteral(resourceName: "image.jpg")'


def strip_literals(source: str, delimiter: str) -> str:
    """
    Replace every ``delimiter(`` … ``)`` span with a single ``#``.

    The closing parenthesis is the first ``)`` after the opening one, as
    object-literal arguments never contain parentheses.  An opener with no
    closer stops the masking for this delimiter.
    """
    opener = delimiter + "("
    while True:
        start = source.find(opener)
        if start < 0:
            break
        end = source.find(")", start)
        if end < 0:
            break
        source = source[:start] + PLACEHOLDER + source[end + 1:]
    return source


class LineLengthRule(Rule):

    description = RuleDescription(
        identifier="line_length",
        name="Line Length",
        description="Lines should not span too many characters.",
        non_triggering_examples=(
            "/" * 120 + "\n",
            _COLOR_LITERAL * 120 + "\n",
            _IMAGE_LITERAL * 120 + "\n",
        ),
        triggering_examples=(
            "/" * 121 + "\n",
            _COLOR_LITERAL * 121 + "\n",
            _IMAGE_LITERAL * 121 + "\n",
        ),
    )

    @classmethod
    def default_configuration(cls) -> SeverityLevelsConfiguration:
        return SeverityLevelsConfiguration(warning=120, error=200)

    def validate(self, file: SourceFile) -> List[StyleViolation]:
        params = self.configuration.params
        min_value = min(param.value for param in params)
        violations: List[StyleViolation] = []
        for line in file.lines:
            if line.byte_length < min_value:
                continue

            stripped = line.content
            for delimiter in LITERAL_DELIMITERS:
                stripped = strip_literals(stripped, delimiter)
            length = len(stripped)

            threshold = first_exceeded(params, length)
            if threshold is None:
                continue
            violations.append(self._violation(
                file,
                file.location_for_line(line.index),
                severity=threshold.severity,
                reason=(
                    f"Line should be {self.configuration.warning} characters "
                    f"or less: currently {length} characters"
                ),
            ))
        return violations
