from nftplugin.services.walker import CollectionWalker, Sleeper, TokenSelector

__all__ = [
    "CollectionWalker",
    "Sleeper",
    "TokenSelector",
]
