"""
object_literal — prefer ``#imageLiteral`` / ``#colorLiteral``
=============================================================

Flags image and color initializers whose arguments are plain literals and
therefore have an object-literal equivalent:

    UIImage(named: "foo")                          → #imageLiteral(...)
    UIColor(red: 0.3, green: 0.3, blue: 0.3, alpha: 1)  → #colorLiteral(...)

Token kinds are compared by set *equality*: ``named: "a\\(b)"`` has the
kinds {string, interpolation anchor, identifier} and does not match.
"""

from __future__ import annotations

from typing import FrozenSet, List, Sequence

from ..checkers import ASTRule, OptInRule, RuleDescription
from ..diagnostics import StyleViolation
from ..source import SourceFile
from ..syntax import CallArgument, NodeKind, SyntaxNode, TokenKind


def _inits_for_classes(names: Sequence[str]) -> FrozenSet[str]:
    return frozenset(
        spelling for name in names for spelling in (name, name + ".init")
    )


IMAGE_INITS = _inits_for_classes(["UIImage", "NSImage"])
COLOR_INITS = _inits_for_classes(["UIColor", "NSColor"])

COLOR_ARGUMENT_SHAPES = (
    ["red", "green", "blue", "alpha"],
    ["white", "alpha"],
)

_STRING_ONLY = frozenset({TokenKind.STRING})
_NUMBER_ONLY = frozenset({TokenKind.NUMBER})


def _triggering_examples() -> List[str]:
    examples: List[str] = []
    for method in ("", ".init"):
        for prefix in ("UI", "NS"):
            examples.extend([
                f'let image = ↓{prefix}Image{method}(named: "foo")',
                f"let color = ↓{prefix}Color{method}(red: 0.3, green: 0.3, blue: 0.3, alpha: 1)",
                f"let color = ↓{prefix}Color{method}(red: 100 / 255.0, green: 50 / 255.0, blue: 0, alpha: 1)",
                f"let color = ↓{prefix}Color{method}(white: 0.5, alpha: 1)",
            ])
    return examples


class ObjectLiteralRule(OptInRule, ASTRule):

    description = RuleDescription(
        identifier="object_literal",
        name="Object Literal",
        description="Prefer object literals over image and color inits.",
        non_triggering_examples=(
            'let image = #imageLiteral(resourceName: "image.jpg")',
            "let color = #colorLiteral(red: 0.9607843161, green: 0.7058823705, "
            "blue: 0.200000003, alpha: 1)",
            "let image = UIImage(named: aVariable)",
            'let image = UIImage(named: "interpolated \\(variable)")',
            "let color = UIColor(red: value, green: value, blue: value, alpha: 1)",
            "let image = NSImage(named: aVariable)",
            'let image = NSImage(named: "interpolated \\(variable)")',
            "let color = NSColor(red: value, green: value, blue: value, alpha: 1)",
        ),
        triggering_examples=tuple(_triggering_examples()),
    )

    def validate_node(self, file: SourceFile, node: SyntaxNode) -> List[StyleViolation]:
        if node.kind is not NodeKind.CALL or node.offset is None:
            return []
        if not (self.is_image_named_init(file, node) or self.is_color_init(file, node)):
            return []
        return [self._violation(file, file.location_for_byte_offset(node.offset))]

    def is_image_named_init(self, file: SourceFile, node: SyntaxNode) -> bool:
        if node.name not in IMAGE_INITS:
            return False
        if node.argument_names != ["named"]:
            return False
        return self._kinds_for(file, node.arguments[0]) == _STRING_ONLY

    def is_color_init(self, file: SourceFile, node: SyntaxNode) -> bool:
        if node.name not in COLOR_INITS:
            return False
        if node.argument_names not in COLOR_ARGUMENT_SHAPES:
            return False
        return all(
            self._kinds_for(file, argument) == _NUMBER_ONLY
            for argument in node.arguments
        )

    @staticmethod
    def _kinds_for(file: SourceFile, argument: CallArgument) -> FrozenSet[TokenKind]:
        return file.syntax_map.kinds_in(argument.body_offset, argument.body_length)
