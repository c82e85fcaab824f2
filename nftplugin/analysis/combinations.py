"""
Trait combination enumeration.

Produces every attribute set a collection could theoretically mint, given
the possible values of each trait category.
"""

from collections.abc import Sequence

from nftplugin.models.metadata import Attribute, Combination, TraitCategory


def _cartesian_product(
    categories: Sequence[TraitCategory],
    current: tuple[tuple[str, str], ...] = (),
) -> list[tuple[tuple[str, str], ...]]:
    if not categories:
        return []

    head, tail = categories[0], categories[1:]
    output: list[tuple[tuple[str, str], ...]] = []

    for trait_type, values in head.items():
        for value in values:
            partial = (*current, (trait_type, value))
            if tail:
                output.extend(_cartesian_product(tail, partial))
            else:
                output.append(partial)

    return output


def generate_combinations(categories: Sequence[TraitCategory]) -> list[Combination]:
    """
    Enumerate all trait combinations.

    The first category varies slowest, the last fastest. An empty input,
    or any category with no values, yields no combinations. Categories
    sharing a name each contribute their own attribute.

    Args:
        categories: One single-key mapping per trait category, e.g.
            [{"Earring": ["Gold", "Silver"]}, {"Grin": ["Crooked", "Toothy"]}]

    Returns:
        List of combinations, each a list of attributes in category order
    """
    return [
        [Attribute(trait_type=trait_type, value=value) for trait_type, value in combo]
        for combo in _cartesian_product(categories)
    ]


def count_combinations(categories: Sequence[TraitCategory]) -> int:
    """Number of combinations generate_combinations() would produce."""
    if not categories:
        return 0
    total = 1
    for category in categories:
        total *= sum(len(values) for values in category.values())
    return total
