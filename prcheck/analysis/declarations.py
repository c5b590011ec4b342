"""Regex-based declaration extraction.

Recognises class methods and reactive-property fields on a single source
line and pulls out what the documentation checks need: visibility, name,
parameters and the declared return type.

This is a line-pattern heuristic, not a parser. It is isolated behind the
``DeclarationExtractor`` protocol so it can be swapped for a syntax-tree
implementation later.
"""

from __future__ import annotations

import re
from typing import Sequence

from prcheck.types import (
    DeclarationInfo,
    DeclarationKind,
    ParameterSignature,
    Visibility,
)

# ============================================================================
# Line patterns
# ============================================================================

VISIBILITY_RE = re.compile(r"^\s*(public|private|protected)\s")

# Everything up to and including the "(" that opens the parameter list
METHOD_HEAD_RE = re.compile(
    r"^[ \t]*(?:(?P<visibility>public|private|protected)[ \t]+)?"
    r"(?P<qualifiers>(?:(?:static|async|override)[ \t]+)*)"
    r"(?P<name>[A-Za-z_$][\w$]*)\s*(?:<[^()]*>)?\s*\("
)

# After the closing ")": ": ReturnType {"
TYPED_TAIL_RE = re.compile(r"^\s*:\s*(?P<return_type>(?:[^{;=]|=>)+?)\s*\{")
# After the closing ")": "{" with no return type
UNTYPED_TAIL_RE = re.compile(r"^\s*\{")

REACTIVE_RE = re.compile(
    r"^[ \t]*(?:(?P<visibility>public|private|protected)[ \t]+)?"
    r"(?:(?P<readonly>readonly)[ \t]+)?"
    r"(?P<name>[A-Za-z_$][\w$]*)\s*(?::[^=]+?)?\s*=\s*"
    r"(?P<factory>computed|signal|input|output|viewChild)(?P<required>\.required)?\s*[<(]"
)

_FACTORY_KINDS: dict[str, DeclarationKind] = {
    "computed": DeclarationKind.COMPUTED_PROPERTY,
    "signal": DeclarationKind.SIGNAL,
    "input": DeclarationKind.INPUT_PROPERTY,
    "output": DeclarationKind.OUTPUT_PROPERTY,
    "viewChild": DeclarationKind.VIEW_CHILD_PROPERTY,
}

_REQUIRED_FACTORIES = {"input", "viewChild"}

# Call-like statements that look like "name(...) {"
_NON_METHOD_NAMES = {
    "if",
    "for",
    "while",
    "switch",
    "catch",
    "with",
    "function",
    "return",
    "new",
    "typeof",
    "constructor",
}

_PARAMETER_MODIFIER_RE = re.compile(r"^(?:(?:public|private|protected|readonly|override)\s+)+")

_OPENERS = "(<{["
_CLOSERS = ")>}]"


# ============================================================================
# Bracket-aware text helpers
# ============================================================================


def _is_closer(text: str, index: int) -> bool:
    """True when ``text[index]`` closes a nesting level (the ">" of "=>" never does)."""
    ch = text[index]
    if ch not in _CLOSERS:
        return False
    return not (ch == ">" and index > 0 and text[index - 1] == "=")


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on ``separator`` at nesting depth zero.

    Depth rises on ``( < { [`` and falls on their closers, so commas inside
    generic arguments, destructuring patterns and callback types never split.

    Returns:
        Stripped, non-empty segments in order.
    """
    segments: list[str] = []
    depth = 0
    current: list[str] = []

    for i, ch in enumerate(text):
        if ch in _OPENERS:
            depth += 1
        elif _is_closer(text, i):
            depth = max(depth - 1, 0)
        elif ch == separator and depth == 0:
            segment = "".join(current).strip()
            if segment:
                segments.append(segment)
            current = []
            continue
        current.append(ch)

    segment = "".join(current).strip()
    if segment:
        segments.append(segment)
    return segments


def find_matching(text: str, open_index: int) -> int:
    """Index of the bracket closing ``text[open_index]``, or -1 if unbalanced."""
    opener = text[open_index]
    closer = _CLOSERS[_OPENERS.index(opener)]
    depth = 0
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch == opener:
            depth += 1
        elif ch == closer and _is_closer(text, i):
            depth -= 1
            if depth == 0:
                return i
    return -1


def strip_default(text: str) -> str:
    """Drop a trailing ``= default`` assignment at depth zero."""
    depth = 0
    for i, ch in enumerate(text):
        if ch in _OPENERS:
            depth += 1
        elif _is_closer(text, i):
            depth = max(depth - 1, 0)
        elif ch == "=" and depth == 0:
            nxt = text[i + 1] if i + 1 < len(text) else ""
            prev = text[i - 1] if i > 0 else ""
            if nxt not in "=>" and prev not in "=!<>":
                return text[:i]
    return text


# ============================================================================
# Parameter parsing
# ============================================================================


def parse_parameter(segment: str) -> ParameterSignature | None:
    """Parse one parameter segment into a signature.

    Destructuring parameters collapse to the ``destructured`` sentinel; their
    individual fields are never validated.
    """
    text = _PARAMETER_MODIFIER_RE.sub("", segment.strip())
    if not text:
        return None

    if text[0] in "{[":
        close = find_matching(text, 0)
        declared_type = "unknown"
        if close != -1:
            match = re.match(r"\s*\??\s*:\s*(.+)$", text[close + 1 :])
            if match:
                declared_type = strip_default(match.group(1)).strip() or "unknown"
        return ParameterSignature(name=ParameterSignature.DESTRUCTURED, declared_type=declared_type)

    colon = text.find(":")
    default_at = len(strip_default(text))
    if colon != -1 and colon < default_at:
        raw_name = text[:colon]
        declared_type = strip_default(text[colon + 1 :]).strip() or "unknown"
    else:
        raw_name = text[:default_at]
        declared_type = "unknown"

    name = raw_name.strip()
    if name.startswith("..."):
        name = name[3:]
    name = name.strip().lstrip("?").rstrip("?").strip()
    if not name:
        return None
    return ParameterSignature(name=name, declared_type=declared_type)


def parse_parameters(parameter_text: str) -> tuple[ParameterSignature, ...]:
    """Parse the text between a declaration's parentheses."""
    parsed = (parse_parameter(segment) for segment in split_top_level(parameter_text))
    return tuple(p for p in parsed if p is not None)


def extract_visibility(line: str) -> Visibility:
    """The leading access modifier of a line, or ``Visibility.NONE``."""
    match = VISIBILITY_RE.match(line)
    return Visibility(match.group(1)) if match else Visibility.NONE


# ============================================================================
# Class body tracking
# ============================================================================

CLASS_HEAD_RE = re.compile(r"\bclass\s+[A-Za-z_$]")


def strip_non_code(line: str, quote: str = "", in_comment: bool = False) -> tuple[str, str, bool]:
    """Drop string literals and comments from ``line``.

    ``quote`` and ``in_comment`` carry an open template literal or block
    comment over from the previous line; the updated pair is returned with
    the remaining code.
    """
    code: list[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if in_comment:
            end = line.find("*/", i)
            if end == -1:
                return "".join(code), quote, True
            in_comment = False
            i = end + 2
            continue
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
            i += 1
            continue
        if line.startswith("//", i):
            break
        if line.startswith("/*", i):
            in_comment = True
            i += 2
            continue
        if ch in "'\"`":
            quote = ch
        else:
            code.append(ch)
        i += 1

    # Only template literals span lines
    if quote != "`":
        quote = ""
    return "".join(code), quote, in_comment


def member_level_lines(lines: Sequence[str]) -> list[bool]:
    """For each line, whether it starts directly inside a class body.

    Lines outside any class count as member level too, so fragments without
    a class header are treated as class members. Lines inside a method body
    (deeper than the innermost class body) do not.
    """
    flags: list[bool] = []
    depth = 0
    class_depths: list[int] = []
    pending_class = False
    quote = ""
    in_comment = False

    for line in lines:
        flags.append(not class_depths or depth == class_depths[-1])
        code, quote, in_comment = strip_non_code(line, quote, in_comment)
        if CLASS_HEAD_RE.search(code):
            pending_class = True
        for ch in code:
            if ch == "{":
                depth += 1
                if pending_class:
                    class_depths.append(depth)
                    pending_class = False
            elif ch == "}":
                if class_depths and class_depths[-1] == depth:
                    class_depths.pop()
                depth = max(depth - 1, 0)

    return flags


# ============================================================================
# Extractor
# ============================================================================


class RegexDeclarationExtractor:
    """Line-pattern declaration extractor.

    Shapes are tried in priority order:

    1. Method with a declared return type: ``[vis] name(params): Type {``
    2. Method without a return type, only with an explicit access modifier:
       ``vis name(params) {``
    3. Reactive property: ``[vis] [readonly] name = factory[.required](``
       for computed, signal, input, output and viewChild

    Usage:
        extractor = RegexDeclarationExtractor()
        info = extractor.extract("  private total(a: number): number {", line_number=12)
    """

    @property
    def name(self) -> str:
        return "regex"

    def extract(self, line: str, line_number: int = 0) -> DeclarationInfo | None:
        """Recognise the declaration on ``line``, or return None."""
        method = self._extract_method(line, line_number)
        if method is not None:
            return method
        return self._extract_reactive(line, line_number)

    # ----------------------------------------------------------------
    # Methods
    # ----------------------------------------------------------------

    def _extract_method(self, line: str, line_number: int) -> DeclarationInfo | None:
        head = METHOD_HEAD_RE.match(line)
        if not head or head.group("name") in _NON_METHOD_NAMES:
            return None

        open_paren = head.end() - 1
        close_paren = find_matching(line, open_paren)
        if close_paren == -1:
            return None

        tail = line[close_paren + 1 :]
        typed = TYPED_TAIL_RE.match(tail)
        if typed:
            return_type: str | None = typed.group("return_type").strip()
        elif head.group("visibility") and UNTYPED_TAIL_RE.match(tail):
            return_type = None
        else:
            return None

        return DeclarationInfo(
            kind=DeclarationKind.METHOD,
            visibility=extract_visibility(line),
            name=head.group("name"),
            parameters=parse_parameters(line[open_paren + 1 : close_paren]),
            has_declared_return_type=return_type is not None,
            return_type=return_type,
            line_number=line_number,
        )

    # ----------------------------------------------------------------
    # Reactive properties
    # ----------------------------------------------------------------

    def _extract_reactive(self, line: str, line_number: int) -> DeclarationInfo | None:
        match = REACTIVE_RE.match(line)
        if not match:
            return None

        factory = match.group("factory")
        required = match.group("required") is not None
        if required and factory not in _REQUIRED_FACTORIES:
            return None

        return DeclarationInfo(
            kind=_FACTORY_KINDS[factory],
            visibility=extract_visibility(line),
            name=match.group("name"),
            line_number=line_number,
            is_readonly=match.group("readonly") is not None,
            is_required=required,
        )
