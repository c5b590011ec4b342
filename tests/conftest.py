"""
Pytest configuration and shared fixtures for prcheck tests.
"""
import pytest

from prcheck.analysis import (
    CommentBlockLocator,
    ConsistencyValidator,
    DiffRangeComputer,
    RegexDeclarationExtractor,
    ViolationScanner,
)


@pytest.fixture
def computer():
    """Fresh diff range computer."""
    return DiffRangeComputer()


@pytest.fixture
def locator():
    """Documentation block locator."""
    return CommentBlockLocator()


@pytest.fixture
def extractor():
    """Regex declaration extractor."""
    return RegexDeclarationExtractor()


@pytest.fixture
def validator():
    """Consistency validator with default policy."""
    return ConsistencyValidator()


@pytest.fixture
def scanner():
    """Violation scanner with default collaborators."""
    return ViolationScanner()


@pytest.fixture
def component_source():
    """A small Angular component with documented and undocumented members."""
    return "\n".join(
        [
            "@Component({ selector: 'app-cart' })",  # 1
            "export class CartComponent {",  # 2
            "  /** Items in the cart. @public */",  # 3
            "  public items = signal<Item[]>([]);",  # 4
            "",  # 5
            "  /**",  # 6
            "   * Adds an item.",  # 7
            "   * @public",  # 8
            "   * @param {Item} item - item to add",  # 9
            "   * @returns {void}",  # 10
            "   */",  # 11
            "  public add(item: Item): void {",  # 12
            "    this.items.update((list) => [...list, item]);",  # 13
            "  }",  # 14
            "",  # 15
            "  private total(amount: number): number {",  # 16
            "    return amount;",  # 17
            "  }",  # 18
            "}",  # 19
        ]
    )
