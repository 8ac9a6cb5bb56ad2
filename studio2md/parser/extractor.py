"""Extract conversation turns from exported SDK code using Python's ``ast``.

The export assigns a list of ``types.Content(...)`` calls to ``contents`` and
optionally passes a ``system_instruction`` to ``generate_content_config``::

    contents = [
        types.Content(
            role="user",
            parts=[types.Part.from_text(text="Hello")],
        ),
    ]
    generate_content_config = types.GenerateContentConfig(
        system_instruction=[types.Part.from_text(text="Be brief.")],
    )

Only literal shapes are recognised; nothing in the source is executed.
Elements that do not match the expected shape are skipped rather than
reported, so a partially hand-edited export still yields what it can.
"""

from __future__ import annotations

import ast
import logging
from typing import Protocol, runtime_checkable

from studio2md.errors import NotFoundError, ShapeError, SourceSyntaxError
from studio2md.parser.models import ParseResult, Role, SourceMessage
from studio2md.parser.placeholders import is_placeholder_text

logger = logging.getLogger(__name__)

CONTENTS_VARIABLE = "contents"
CONFIG_VARIABLE = "generate_content_config"
INSTRUCTION_KEYWORD = "system_instruction"

NAMESPACE = "types"
CONTENT_TYPE = "Content"
PART_TYPE = "Part"
PART_FACTORY = "from_text"

_WARMUP_SOURCE = f'{CONTENTS_VARIABLE} = [{NAMESPACE}.{CONTENT_TYPE}(role="user", parts=[])]'


@runtime_checkable
class TextStructureExtractor(Protocol):
    """Turns source text into structured messages."""

    def initialize(self) -> None: ...

    def parse(self, source_text: str) -> ParseResult: ...


# ---------------------------------------------------------------------------
# Node shape helpers
# ---------------------------------------------------------------------------


def _find_assignment(tree: ast.AST, name: str) -> ast.Assign | None:
    """Return the first ``name = ...`` assignment anywhere in the tree."""
    for node in ast.walk(tree):
        if (
            isinstance(node, ast.Assign)
            and len(node.targets) == 1
            and isinstance(node.targets[0], ast.Name)
            and node.targets[0].id == name
        ):
            return node
    return None


def _string_literal(node: ast.AST) -> str | None:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


def _keyword(call: ast.Call, name: str) -> ast.AST | None:
    for keyword in call.keywords:
        if keyword.arg == name:
            return keyword.value
    return None


def _is_content_call(node: ast.AST) -> bool:
    """``types.Content(...)``"""
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Attribute)
        and isinstance(node.func.value, ast.Name)
        and node.func.value.id == NAMESPACE
        and node.func.attr == CONTENT_TYPE
    )


def _is_part_call(node: ast.AST) -> bool:
    """``types.Part.from_text(...)``"""
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Attribute)
        and isinstance(node.func.value, ast.Attribute)
        and isinstance(node.func.value.value, ast.Name)
        and node.func.value.value.id == NAMESPACE
        and node.func.value.attr == PART_TYPE
        and node.func.attr == PART_FACTORY
    )


def _part_text(node: ast.AST) -> str | None:
    if not _is_part_call(node):
        return None
    value = _keyword(node, "text")
    return _string_literal(value) if value is not None else None


def _parse_content(node: ast.AST) -> SourceMessage | None:
    """Build a message from one ``contents`` element, or None if it doesn't fit."""
    if not _is_content_call(node):
        return None

    role_node = _keyword(node, "role")
    parts_node = _keyword(node, "parts")
    role = _string_literal(role_node) if role_node is not None else None
    if role not in (Role.user.value, Role.model.value):
        return None
    if not isinstance(parts_node, ast.List):
        return None

    texts = []
    for part_node in parts_node.elts:
        text = _part_text(part_node)
        if text is None:
            continue
        if is_placeholder_text(text):
            logger.debug("Dropping placeholder part on line %d", part_node.lineno)
            continue
        texts.append(text)

    if not texts:
        return None
    return SourceMessage(role=Role(role), parts=texts)


def _parse_instruction(node: ast.AST) -> str | None:
    if isinstance(node, ast.List):
        if not node.elts:
            return None
        text = _part_text(node.elts[0])
    else:
        text = _string_literal(node)

    if text is None or is_placeholder_text(text):
        return None
    return text


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class AstExtractor:
    """Default extractor built on the standard library's Python grammar."""

    def initialize(self) -> None:
        ast.parse(_WARMUP_SOURCE)

    def parse(self, source_text: str) -> ParseResult:
        try:
            tree = ast.parse(source_text.strip())
        except (SyntaxError, ValueError, RecursionError, MemoryError) as e:
            # nesting or size beyond what the compiler can build a tree for
            raise SourceSyntaxError(str(e) or type(e).__name__) from e

        messages = self.extract_messages(tree)
        instruction = self.extract_system_instruction(tree)
        logger.debug(
            "Extracted %d message(s), system instruction %s",
            len(messages),
            "present" if instruction else "absent",
        )
        return ParseResult(messages=messages, system_instruction=instruction)

    @staticmethod
    def extract_messages(tree: ast.AST) -> list[SourceMessage]:
        assign = _find_assignment(tree, CONTENTS_VARIABLE)
        if assign is None:
            raise NotFoundError(CONTENTS_VARIABLE)
        if not isinstance(assign.value, ast.List):
            raise ShapeError(CONTENTS_VARIABLE)

        messages = []
        for element in assign.value.elts:
            message = _parse_content(element)
            if message is None:
                logger.debug("Skipping contents element on line %d", element.lineno)
                continue
            messages.append(message)
        return messages

    @staticmethod
    def extract_system_instruction(tree: ast.AST) -> str | None:
        assign = _find_assignment(tree, CONFIG_VARIABLE)
        if assign is None or not isinstance(assign.value, ast.Call):
            return None
        value = _keyword(assign.value, INSTRUCTION_KEYWORD)
        if value is None:
            return None
        return _parse_instruction(value)
