"""Product search for the new-item picker."""

from collections.abc import Iterable, Sequence

from freshshelf.domain.catalog import Category, Product


def _category_names(categories: Iterable[Category]) -> dict[str, str]:
    """Map category ID to its lowercased name."""
    return {category.id: category.name.lower() for category in categories}


def matches_query(product: Product, query: str, *, category_names: dict[str, str]) -> bool:
    """Return True if ``query`` (already lowercased) occurs in the product or category name."""
    if query in product.name.lower():
        return True
    category_name = category_names.get(product.category_id)
    return category_name is not None and query in category_name


def filter_products(
    products: Sequence[Product],
    query: str,
    *,
    categories: Iterable[Category] = (),
) -> list[Product]:
    """Narrow the product list to those matching a search query.

    Matching is case-insensitive substring containment against the product
    name or the name of its category. A blank query returns every product.

    Args:
        products: Products to search, in display order
        query: User's search text
        categories: Category catalog used to resolve category names

    Returns:
        Matching products in their original order
    """
    needle = query.strip().lower()
    if not needle:
        return list(products)

    category_names = _category_names(categories)
    return [product for product in products if matches_query(product, needle, category_names=category_names)]
