from nftplugin.models.failure import (
    ExternalCallError,
    FailureKind,
    InvalidAddressError,
    InvalidDataURIError,
    InvalidJSONError,
    InvalidURISchemeError,
    NFTPluginError,
)
from nftplugin.models.metadata import (
    DEFAULT_RPM,
    Attribute,
    Combination,
    Metadata,
    RateLimit,
    ResolverPayload,
    TraitCategory,
)

__all__ = [
    "DEFAULT_RPM",
    "Attribute",
    "Combination",
    "ExternalCallError",
    "FailureKind",
    "InvalidAddressError",
    "InvalidDataURIError",
    "InvalidJSONError",
    "InvalidURISchemeError",
    "Metadata",
    "NFTPluginError",
    "RateLimit",
    "ResolverPayload",
    "TraitCategory",
]
