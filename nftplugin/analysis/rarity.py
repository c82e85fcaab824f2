def trait_rarity_score(collection_size: int, match_count: int) -> int:
    """
    Rarity of a trait: collection size per token carrying it.

    Args:
        collection_size: Total tokens in the collection
        match_count: Tokens carrying the trait

    Returns:
        collection_size // match_count, or 0 when nothing matched
    """
    if match_count == 0:
        return 0
    return collection_size // match_count
