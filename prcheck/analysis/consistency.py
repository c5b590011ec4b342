"""Documentation/declaration consistency checks.

Cross-checks a located documentation block against what the declaration
line actually says: access modifier vs. visibility tag, declared parameters
vs. ``@param`` tags, return tag presence, and the single-line format
required for reactive properties.

All rules are independent; every failing rule is reported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum

from prcheck.analysis.declarations import find_matching
from prcheck.types import CommentBlock, DeclarationInfo, DeclarationKind, Visibility


class ValidationCode(str, Enum):
    """Identifiers for each consistency failure."""

    MISSING_DOC = "missing-doc"
    MISSING_VISIBILITY_TAG = "missing-visibility-tag"
    MULTIPLE_VISIBILITY_TAGS = "multiple-visibility-tags"
    VISIBILITY_TAG_MISMATCH = "visibility-tag-mismatch"
    MISSING_RETURN_TAG = "missing-return-tag"
    MISSING_PARAM_TAG = "missing-param-tag"
    PARAM_TAG_MISSING_TYPE = "param-tag-missing-type"
    EXTRA_PARAM_TAG = "extra-param-tag"
    MULTILINE_PROPERTY_DOC = "multiline-property-doc"
    EMPTY_PROPERTY_DOC = "empty-property-doc"


class ReturnTagPolicy(str, Enum):
    """Whether methods returning no value still need a return tag."""

    REQUIRE = "require"
    EXEMPT_VOID = "exempt-void"


@dataclass(frozen=True)
class ValidationError:
    """One consistency failure for a declaration."""

    code: ValidationCode
    message: str
    critical: bool = False


_VISIBILITY_TAG_RES: dict[Visibility, re.Pattern[str]] = {
    Visibility.PUBLIC: re.compile(r"@public\b"),
    Visibility.PRIVATE: re.compile(r"@private\b"),
    Visibility.PROTECTED: re.compile(r"@protected\b"),
}

RETURN_TAG_RE = re.compile(r"@returns?(?:\s|$)", re.MULTILINE)

PARAM_TAG_RE = re.compile(r"@param\b")
# name, [name] or [name=default] after the optional {Type}
PARAM_NAME_RE = re.compile(r"[ \t]*\[?[ \t]*([\w$]+(?:\.[\w$]+)*)")

_NO_VALUE_TYPES = {"void", "Promise<void>"}

_DOC_DELIMITERS_RE = re.compile(r"/\*\*|\*/")


class ConsistencyValidator:
    """Validates a declaration against its documentation block.

    Rules:
    - Missing documentation (all kinds) short-circuits every other rule
    - Visibility tag (all kinds, skipped without an access modifier)
    - Return tag (methods), subject to ``return_tag_policy``
    - Parameter tags (methods with at least one named parameter)
    - Single-line format and non-empty description (reactive properties)

    Usage:
        validator = ConsistencyValidator(ReturnTagPolicy.EXEMPT_VOID)
        errors = validator.validate(declaration, block)
    """

    def __init__(
        self,
        return_tag_policy: ReturnTagPolicy = ReturnTagPolicy.REQUIRE,
        critical_codes: frozenset[ValidationCode] = frozenset(),
    ) -> None:
        self.return_tag_policy = return_tag_policy
        self.critical_codes = critical_codes

    def validate(self, declaration: DeclarationInfo, block: CommentBlock) -> list[ValidationError]:
        """Check ``block`` against ``declaration`` and return every failure."""
        if not block.exists:
            errors = [
                ValidationError(
                    ValidationCode.MISSING_DOC,
                    f"Missing documentation above {declaration.kind.value}",
                )
            ]
        elif declaration.kind.is_reactive:
            errors = self._validate_property(declaration, block)
        else:
            errors = self._validate_method(declaration, block)

        if not self.critical_codes:
            return errors
        return [replace(e, critical=True) if e.code in self.critical_codes else e for e in errors]

    # ----------------------------------------------------------------
    # Per-kind rule sets
    # ----------------------------------------------------------------

    def _validate_method(self, declaration: DeclarationInfo, block: CommentBlock) -> list[ValidationError]:
        errors: list[ValidationError] = []
        errors.extend(check_visibility_tag(block.raw_text, declaration.visibility, declaration.kind))
        if self._return_tag_required(declaration) and not has_return_tag(block.raw_text):
            errors.append(
                ValidationError(ValidationCode.MISSING_RETURN_TAG, "Missing @returns in documentation")
            )
        errors.extend(check_param_tags(block.raw_text, declaration))
        return errors

    def _validate_property(self, declaration: DeclarationInfo, block: CommentBlock) -> list[ValidationError]:
        label = declaration.kind.label
        if not block.is_single_line:
            # Content rules wait until the block has the expected shape
            return [
                ValidationError(
                    ValidationCode.MULTILINE_PROPERTY_DOC,
                    f"{label} should have single-line documentation (/** ... */), not multi-line",
                )
            ]

        errors: list[ValidationError] = []
        if not _DOC_DELIMITERS_RE.sub("", block.raw_text).strip():
            errors.append(
                ValidationError(
                    ValidationCode.EMPTY_PROPERTY_DOC,
                    f"{label} documentation is empty - add a description",
                )
            )
        errors.extend(check_visibility_tag(block.raw_text, declaration.visibility, declaration.kind))
        return errors

    def _return_tag_required(self, declaration: DeclarationInfo) -> bool:
        if self.return_tag_policy is ReturnTagPolicy.REQUIRE:
            return True
        return (declaration.return_type or "").replace(" ", "") not in _NO_VALUE_TYPES


# ============================================================================
# Individual rules
# ============================================================================


def check_visibility_tag(
    doc_text: str,
    visibility: Visibility,
    kind: DeclarationKind = DeclarationKind.METHOD,
) -> list[ValidationError]:
    """The block must carry exactly one visibility tag, matching the code."""
    if visibility is Visibility.NONE:
        return []

    present = [v for v, pattern in _VISIBILITY_TAG_RES.items() if pattern.search(doc_text)]

    if not present:
        return [
            ValidationError(
                ValidationCode.MISSING_VISIBILITY_TAG,
                f"Missing @{visibility.value} tag in documentation",
            )
        ]
    if len(present) > 1:
        return [
            ValidationError(
                ValidationCode.MULTIPLE_VISIBILITY_TAGS,
                "Multiple access modifier tags in documentation",
            )
        ]
    if present[0] is not visibility:
        return [
            ValidationError(
                ValidationCode.VISIBILITY_TAG_MISMATCH,
                f"Documentation should have @{visibility.value} ({kind.value} is {visibility.value})",
            )
        ]
    return []


def has_return_tag(doc_text: str) -> bool:
    """True when the block contains ``@returns`` or ``@return``."""
    return bool(RETURN_TAG_RE.search(doc_text))


@dataclass(frozen=True)
class ParamTag:
    """One ``@param`` tag: its name and the text inside ``{...}`` (None when absent)."""

    name: str
    declared_type: str | None


def parse_param_tags(doc_text: str) -> list[ParamTag]:
    """Every ``@param`` tag in documentation order.

    The type is read up to its balanced closing brace, so object types such
    as ``{Array<{id: string}>}`` stay whole.
    """
    tags: list[ParamTag] = []
    for tag in PARAM_TAG_RE.finditer(doc_text):
        pos = tag.end()
        while pos < len(doc_text) and doc_text[pos] in " \t":
            pos += 1

        declared_type = None
        if doc_text.startswith("{", pos):
            close = find_matching(doc_text, pos)
            if close == -1:
                continue
            declared_type = doc_text[pos + 1 : close].strip()
            pos = close + 1

        name = PARAM_NAME_RE.match(doc_text, pos)
        if name:
            tags.append(ParamTag(name.group(1), declared_type))
    return tags


def documented_param_names(doc_text: str) -> list[str]:
    """Names of every ``@param`` tag in documentation order."""
    return [tag.name for tag in parse_param_tags(doc_text)]


def check_param_tags(doc_text: str, declaration: DeclarationInfo) -> list[ValidationError]:
    """Every named parameter needs a typed tag; every tag needs a parameter."""
    named = declaration.named_parameters
    if not named:
        return []

    tags = parse_param_tags(doc_text)
    by_name: dict[str, ParamTag] = {}
    for tag in tags:
        by_name.setdefault(tag.name, tag)

    errors: list[ValidationError] = []

    for param in named:
        tag = by_name.get(param.name)
        if tag is None:
            errors.append(
                ValidationError(ValidationCode.MISSING_PARAM_TAG, f"Missing @param for '{param.name}'")
            )
            continue
        if not tag.declared_type:
            errors.append(
                ValidationError(
                    ValidationCode.PARAM_TAG_MISSING_TYPE,
                    f"@param {param.name} missing {{Type}} in curly braces",
                )
            )

    declared_names = {p.name for p in named}
    # Tags for destructured parameters carry names the code never spells out
    unattributed = len(declaration.parameters) - len(named)
    for tag in tags:
        if tag.name in declared_names or "." in tag.name:
            continue
        if unattributed > 0:
            unattributed -= 1
            continue
        errors.append(
            ValidationError(
                ValidationCode.EXTRA_PARAM_TAG,
                f"Extra @param '{tag.name}' in documentation doesn't match any parameter",
            )
        )

    return errors
