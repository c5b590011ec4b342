"""
Documentation Block Location

Tests for the backward scan that associates a ``/** ... */`` block with the
declaration below it.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from prcheck.analysis import CommentBlockLocator
from prcheck.analysis.comment_blocks import DOC_OPEN_RE, is_decorator_line, is_inside_open_block


class TestLocateMultiLine:
    """Tests for multi-line documentation blocks."""

    def test_block_directly_above(self, locator):
        lines = [
            "class A {",
            "  /**",
            "   * Adds.",
            "   * @public",
            "   */",
            "  public add(): void {",
        ]
        block = locator.locate(lines, 5)
        assert block.exists is True
        assert block.is_single_line is False
        assert (block.start_line, block.end_line) == (1, 4)
        assert "@public" in block.raw_text

    def test_blank_lines_between(self, locator):
        lines = ["  /**", "   * Doc.", "   */", "", "", "  public add(): void {"]
        block = locator.locate(lines, 5)
        assert (block.start_line, block.end_line) == (0, 2)

    def test_text_before_close_marker(self, locator):
        """A block may end with 'text */' instead of a bare '*/'."""
        lines = ["  /**", "   * Adds. @public */", "  public add(): void {"]
        block = locator.locate(lines, 2)
        assert (block.start_line, block.end_line) == (0, 1)

    def test_decorators_between(self, locator):
        lines = [
            "  /**",
            "   * Handles clicks.",
            "   * @public",
            "   */",
            "  @HostListener('document:click', ['$event'])",
            "  @Debounce(100)",
            "  public onClick(event: Event): void {",
        ]
        block = locator.locate(lines, 6)
        assert (block.start_line, block.end_line) == (0, 3)

    def test_doc_line_quoting_plain_comment(self, locator):
        """A doc line that mentions '/* x */' does not end the block early."""
        lines = [
            "/**",
            " * Strips /* x */",
            " * @public",
            " * @returns {string} s",
            " */",
            "public f(): string {",
        ]
        block = locator.locate(lines, 5)
        assert block.exists is True
        assert (block.start_line, block.end_line) == (0, 4)

    def test_earlier_block_close_still_rejects(self, locator):
        lines = ["  x = 1; /* note */", "   * stray", "   */", "  public f(): void {"]
        assert locator.locate(lines, 3).exists is False

    def test_carriage_returns_stripped(self, locator):
        lines = ["  /**\r", "   * Doc.\r", "   */\r", "  public add(): void {\r"]
        block = locator.locate(lines, 3)
        assert "\r" not in block.raw_text


class TestLocateSingleLine:
    """Tests for single-line documentation blocks."""

    def test_single_line(self, locator):
        lines = ["  /** Total price. */", "  readonly total = computed(() => 1);"]
        block = locator.locate(lines, 1)
        assert block.exists is True
        assert block.is_single_line is True
        assert block.start_line == block.end_line == 0
        assert block.raw_text == "  /** Total price. */"

    def test_empty_single_line(self, locator):
        block = locator.locate(["  /** */", "  count = signal(0);"], 1)
        assert block.exists is True
        assert block.is_single_line is True


class TestLocateRejects:
    """Tests for lines that have no associated documentation."""

    def test_first_line(self, locator):
        assert locator.locate(["  public add(): void {"], 0).exists is False

    def test_empty_file(self, locator):
        assert locator.locate([], 3).exists is False

    def test_code_between(self, locator):
        lines = ["  /** Doc. */", "  private x = 1;", "  public add(): void {"]
        assert locator.locate(lines, 2).exists is False

    def test_two_blocks_each_separated_by_code(self, locator):
        lines = [
            "export class Cart {",
            "  /** Doc one. @public */",
            "  private a = 1;",
            "  public first(): void {",
            "  }",
            "  /**",
            "   * Doc two.",
            "   * @public",
            "   */",
            "  private b = 2;",
            "  public second(): void {",
            "  }",
            "}",
        ]
        assert locator.locate(lines, 3).exists is False
        assert locator.locate(lines, 10).exists is False

    def test_plain_single_line_comment(self, locator):
        assert locator.locate(["  /* plain */", "  public add(): void {"], 1).exists is False

    def test_plain_multi_line_comment(self, locator):
        lines = ["  /*", "   * plain", "   */", "  public add(): void {"]
        assert locator.locate(lines, 3).exists is False

    def test_line_comment(self, locator):
        assert locator.locate(["  // Adds.", "  public add(): void {"], 1).exists is False

    def test_unterminated_opener(self, locator):
        """An opener whose block never closes above the target is not a block."""
        lines = ["  /**", "  public add(): void {"]
        assert locator.locate(lines, 1).exists is False


class TestHelpers:
    """Tests for decorator and open-block detection."""

    def test_decorator_line(self):
        assert is_decorator_line(["  @Input()"], 0) is True
        assert is_decorator_line(["  @Component({"], 0) is True

    def test_tag_is_not_a_decorator(self):
        assert is_decorator_line(["   * @public"], 0) is False
        assert is_decorator_line(["   * @param {string} id"], 0) is False

    def test_decorator_inside_open_block(self):
        lines = ["  /**", "  @Example()", "   */"]
        assert is_inside_open_block(lines, 1) is True
        assert is_decorator_line(lines, 1) is False


# Line fragments typical of TypeScript class bodies
_FRAGMENTS = st.sampled_from(
    [
        "",
        "  /**",
        "   * Text.",
        "   * @public",
        "   */",
        "  /** One line. */",
        "  /* plain */",
        "  @Input()",
        "  public add(a: number): number {",
        "  count = signal(0);",
        "  }",
        "  // note",
    ]
)


class TestLocatorProperties:
    """Property tests for the locator."""

    @given(lines=st.lists(_FRAGMENTS, min_size=1, max_size=15), data=st.data())
    @settings(max_examples=200)
    def test_block_bounds(self, lines, data):
        """A located block lies above the target and starts with an opener."""
        target = data.draw(st.integers(min_value=0, max_value=len(lines) - 1))
        block = CommentBlockLocator().locate(lines, target)
        if block.exists:
            assert 0 <= block.start_line <= block.end_line < target
            assert DOC_OPEN_RE.match(lines[block.start_line])
        else:
            assert block.start_line == block.end_line == -1

    @given(lines=st.lists(_FRAGMENTS, min_size=1, max_size=15), data=st.data())
    @settings(max_examples=100)
    def test_idempotent(self, lines, data):
        """Locating twice gives the same block."""
        target = data.draw(st.integers(min_value=0, max_value=len(lines) - 1))
        locator = CommentBlockLocator()
        assert locator.locate(lines, target) == locator.locate(lines, target)
