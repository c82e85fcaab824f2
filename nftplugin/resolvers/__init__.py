from nftplugin.resolvers.uri import (
    DATA_URI_PREFIX,
    IPFS_PREFIX,
    BlankNetworkResolver,
    GatewayResolver,
    IPFSResolver,
    TokenURIResolver,
    data_uri_resolver,
    decode_data_uri,
    default_resolver,
    unwrap_metadata,
)

__all__ = [
    "DATA_URI_PREFIX",
    "IPFS_PREFIX",
    "BlankNetworkResolver",
    "GatewayResolver",
    "IPFSResolver",
    "TokenURIResolver",
    "data_uri_resolver",
    "decode_data_uri",
    "default_resolver",
    "unwrap_metadata",
]
