"""
Documentation Consistency

Tests for cross-checking a documentation block against its declaration.
"""

import pytest

from prcheck.analysis import ConsistencyValidator, ReturnTagPolicy, ValidationCode
from prcheck.analysis.consistency import check_param_tags, documented_param_names, has_return_tag
from prcheck.types import (
    CommentBlock,
    DeclarationInfo,
    DeclarationKind,
    ParameterSignature,
    Visibility,
)


def method(visibility=Visibility.PUBLIC, params=(), return_type="string"):
    return DeclarationInfo(
        kind=DeclarationKind.METHOD,
        visibility=visibility,
        name="run",
        parameters=tuple(ParameterSignature(n, t) for n, t in params),
        has_declared_return_type=return_type is not None,
        return_type=return_type,
    )


def prop(kind=DeclarationKind.SIGNAL, visibility=Visibility.NONE):
    return DeclarationInfo(kind=kind, visibility=visibility, name="value")


def block(*lines):
    text = "\n".join(lines)
    if len(lines) == 1:
        return CommentBlock(exists=True, is_single_line=True, start_line=0, end_line=0, raw_text=text)
    return CommentBlock(exists=True, start_line=0, end_line=len(lines) - 1, raw_text=text)


def codes(errors):
    return [e.code for e in errors]


class TestMissingDocumentation:
    """Tests for the missing-documentation short circuit."""

    def test_single_error(self, validator):
        errors = validator.validate(method(params=[("x", "number")]), CommentBlock.absent())
        assert codes(errors) == [ValidationCode.MISSING_DOC]
        assert errors[0].message == "Missing documentation above method"

    def test_property_kind_in_message(self, validator):
        errors = validator.validate(prop(DeclarationKind.COMPUTED_PROPERTY), CommentBlock.absent())
        assert errors[0].message == "Missing documentation above computed property"


class TestMethodRules:
    """Tests for method documentation rules."""

    def test_complete_documentation(self, validator):
        """Typed tags for every parameter, a return tag and the right visibility tag."""
        declaration = method(params=[("x", "number"), ("y", "string")])
        doc = block(
            "/**",
            " * Joins values.",
            " * @public",
            " * @param {number} x - first",
            " * @param {string} y - second",
            " * @returns {string} joined",
            " */",
        )
        assert validator.validate(declaration, doc) == []

    def test_renamed_parameter(self, validator):
        """A rename yields a missing tag for the new name and an extra tag for the old one."""
        declaration = method(params=[("total", "number")])
        doc = block("/**", " * @public", " * @param {number} amount - value", " * @returns {string} x", " */")
        errors = validator.validate(declaration, doc)
        assert [e.message for e in errors] == [
            "Missing @param for 'total'",
            "Extra @param 'amount' in documentation doesn't match any parameter",
        ]

    def test_param_without_type(self, validator):
        declaration = method(params=[("x", "number")])
        doc = block("/**", " * @public", " * @param x the value", " * @returns {string} y", " */")
        errors = validator.validate(declaration, doc)
        assert codes(errors) == [ValidationCode.PARAM_TAG_MISSING_TYPE]
        assert errors[0].message == "@param x missing {Type} in curly braces"

    def test_optional_bracketed_param(self, validator):
        declaration = method(params=[("limit", "number")])
        doc = block("/**", " * @public", " * @param {number} [limit=10] - max", " * @returns {string} y", " */")
        assert validator.validate(declaration, doc) == []

    def test_error_order(self, validator):
        """Visibility, then return tag, then parameter errors."""
        declaration = method(visibility=Visibility.PRIVATE, params=[("x", "number")])
        doc = block("/**", " * Does things.", " */")
        assert codes(validator.validate(declaration, doc)) == [
            ValidationCode.MISSING_VISIBILITY_TAG,
            ValidationCode.MISSING_RETURN_TAG,
            ValidationCode.MISSING_PARAM_TAG,
        ]

    def test_return_singular_tag_accepted(self, validator):
        doc = block("/**", " * @public", " * @return {string} value", " */")
        assert validator.validate(method(), doc) == []

    def test_void_requires_return_tag_by_default(self, validator):
        doc = block("/**", " * @public", " */")
        assert codes(validator.validate(method(return_type="void"), doc)) == [ValidationCode.MISSING_RETURN_TAG]

    @pytest.mark.parametrize("return_type", ["void", "Promise<void>", "Promise< void >"])
    def test_exempt_void_policy(self, return_type):
        validator = ConsistencyValidator(ReturnTagPolicy.EXEMPT_VOID)
        doc = block("/**", " * @public", " */")
        assert validator.validate(method(return_type=return_type), doc) == []

    def test_exempt_void_still_requires_tag_for_values(self):
        validator = ConsistencyValidator(ReturnTagPolicy.EXEMPT_VOID)
        doc = block("/**", " * @public", " */")
        assert codes(validator.validate(method(return_type="number"), doc)) == [ValidationCode.MISSING_RETURN_TAG]

    def test_critical_codes(self):
        validator = ConsistencyValidator(critical_codes=frozenset({ValidationCode.MISSING_DOC}))
        errors = validator.validate(method(), CommentBlock.absent())
        assert errors[0].critical is True


class TestVisibilityTags:
    """Tests for the visibility-tag rule."""

    def test_mismatch(self, validator):
        doc = block("/**", " * @private", " * @returns {string} x", " */")
        errors = validator.validate(method(), doc)
        assert codes(errors) == [ValidationCode.VISIBILITY_TAG_MISMATCH]
        assert errors[0].message == "Documentation should have @public (method is public)"

    def test_multiple(self, validator):
        doc = block("/**", " * @public", " * @private", " * @returns {string} x", " */")
        errors = validator.validate(method(), doc)
        assert errors[0].message == "Multiple access modifier tags in documentation"

    def test_skipped_without_modifier(self, validator):
        doc = block("/**", " * @returns {string} x", " */")
        assert validator.validate(method(visibility=Visibility.NONE), doc) == []


class TestParameterTags:
    """Tests for parameter tag matching."""

    def test_no_named_parameters_skips_rule(self):
        declaration = method(params=[(ParameterSignature.DESTRUCTURED, "Options")])
        doc = "/**\n * @param {Options} options - settings\n */"
        assert check_param_tags(doc, declaration) == []

    def test_destructured_tag_attributed(self):
        declaration = method(params=[(ParameterSignature.DESTRUCTURED, "Options"), ("id", "string")])
        doc = "/**\n * @param {Options} options - settings\n * @param {string} id - key\n */"
        assert check_param_tags(doc, declaration) == []

    def test_dotted_tags_ignored(self):
        declaration = method(params=[("options", "Options")])
        doc = "/**\n * @param {Options} options - settings\n * @param {string} options.name - name\n */"
        assert check_param_tags(doc, declaration) == []

    def test_case_sensitive(self):
        declaration = method(params=[("userId", "string")])
        errors = check_param_tags("/** @param {string} userid - id */", declaration)
        assert codes(errors) == [ValidationCode.MISSING_PARAM_TAG, ValidationCode.EXTRA_PARAM_TAG]

    def test_nested_braces_in_type(self, validator):
        declaration = method(params=[("items", "Array<{id: string}>")], return_type="number")
        doc = block(
            "/**",
            " * @public",
            " * @param {Array<{id: string}>} items - rows",
            " * @returns {number} count",
            " */",
        )
        assert validator.validate(declaration, doc) == []

    def test_object_type_then_second_tag(self):
        declaration = method(params=[("opts", "{ a: { b: number } }"), ("id", "string")])
        doc = "/**\n * @param {{ a: { b: number } }} opts - nested\n * @param {string} id - key\n */"
        assert check_param_tags(doc, declaration) == []

    def test_empty_braces_missing_type(self):
        errors = check_param_tags("/**\n * @param {} id - key\n */", method(params=[("id", "string")]))
        assert codes(errors) == [ValidationCode.PARAM_TAG_MISSING_TYPE]

    def test_untyped_tag_missing_type(self):
        errors = check_param_tags("/**\n * @param id - key\n */", method(params=[("id", "string")]))
        assert codes(errors) == [ValidationCode.PARAM_TAG_MISSING_TYPE]

    def test_documented_names(self):
        doc = "@param {string} a - x\n@param b\n@param {number} [c=1]"
        assert documented_param_names(doc) == ["a", "b", "c"]

    def test_has_return_tag(self):
        assert has_return_tag(" * @returns {number} x") is True
        assert has_return_tag(" * @returnsValue") is False


class TestPropertyRules:
    """Tests for reactive-property documentation rules."""

    def test_multi_line_is_one_error(self, validator):
        """Multi-line docs yield exactly one format error, whatever the content."""
        doc = block("/**", " * @private", " */")
        errors = validator.validate(prop(visibility=Visibility.PUBLIC), doc)
        assert codes(errors) == [ValidationCode.MULTILINE_PROPERTY_DOC]
        assert errors[0].message == "Signal should have single-line documentation (/** ... */), not multi-line"

    def test_empty_single_line(self, validator):
        errors = validator.validate(prop(), block("  /** */"))
        assert codes(errors) == [ValidationCode.EMPTY_PROPERTY_DOC]
        assert errors[0].message == "Signal documentation is empty - add a description"

    def test_single_line_with_tag(self, validator):
        doc = block("  /** Selected id. @public */")
        assert validator.validate(prop(DeclarationKind.INPUT_PROPERTY, Visibility.PUBLIC), doc) == []

    def test_single_line_missing_tag(self, validator):
        doc = block("  /** Selected id. */")
        errors = validator.validate(prop(DeclarationKind.INPUT_PROPERTY, Visibility.PROTECTED), doc)
        assert [e.message for e in errors] == ["Missing @protected tag in documentation"]
