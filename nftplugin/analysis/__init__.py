from nftplugin.analysis.combinations import count_combinations, generate_combinations
from nftplugin.analysis.matching import matches_attributes
from nftplugin.analysis.rarity import trait_rarity_score

__all__ = [
    "count_combinations",
    "generate_combinations",
    "matches_attributes",
    "trait_rarity_score",
]
