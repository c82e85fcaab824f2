"""
Token URI resolvers.

A resolver turns the string returned by a contract's tokenURI() into the
token's metadata. Any async callable taking the URI works; these are the
ones shipped with the plugin:

- IPFSResolver: ipfs://<cid>/<path> fetched through an HTTP gateway (default)
- BlankNetworkResolver: https://ipfs.blanknetwork.com/... fetched as-is
- data_uri_resolver: data:application/json;base64,... decoded in process

Resolvers may return the metadata mapping directly or an envelope holding
it in `.data`; unwrap_metadata() normalises both.
"""

import base64
import binascii
import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx

from nftplugin.config import Settings, settings
from nftplugin.models.failure import (
    ExternalCallError,
    InvalidDataURIError,
    InvalidJSONError,
    InvalidURISchemeError,
)
from nftplugin.models.metadata import Metadata, ResolverPayload

IPFS_PREFIX = "ipfs://"
DATA_URI_PREFIX = "data:application/json;base64,"

TokenURIResolver = Callable[[str], Awaitable[ResolverPayload]]


class GatewayResolver:
    """
    Resolves URIs with a fixed prefix by fetching them over an HTTP gateway.

    The prefix is replaced with the gateway URL, so `ipfs://Qm.../1` with
    gateway `https://ipfs.io/ipfs/` becomes `https://ipfs.io/ipfs/Qm.../1`.
    """

    def __init__(
        self,
        prefix: str,
        gateway: str,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            prefix: URI prefix this resolver accepts
            gateway: URL the prefix is rewritten onto
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            user_agent: User-Agent header. Defaults to settings.user_agent.
        """
        self.prefix = prefix
        self.gateway = gateway
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.user_agent = user_agent or settings.user_agent

    def to_http_url(self, uri: str) -> str:
        """
        Rewrite a token URI onto the gateway.

        Raises:
            InvalidURISchemeError: If the URI does not start with the prefix
        """
        if not uri.startswith(self.prefix):
            raise InvalidURISchemeError(uri, self.prefix)
        return self.gateway + uri[len(self.prefix) :]

    async def __call__(self, uri: str) -> Any:
        """
        Fetch and parse the metadata JSON behind a token URI.

        Raises:
            InvalidURISchemeError: If the URI does not start with the prefix
            ExternalCallError: If the request fails or returns a non-2xx status
            InvalidJSONError: If the body is not JSON
        """
        url = self.to_http_url(uri)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url,
                    headers={"User-Agent": self.user_agent},
                    follow_redirects=True,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ExternalCallError(f"Failed to fetch {url}", detail=str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            raise InvalidJSONError(f"Response from {url} is not JSON", detail=str(e)) from e


class IPFSResolver(GatewayResolver):
    """Default resolver: ipfs:// URIs through a public gateway."""

    def __init__(
        self,
        gateway: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        super().__init__(IPFS_PREFIX, gateway or settings.ipfs_gateway, timeout, user_agent)


class BlankNetworkResolver(GatewayResolver):
    """Resolver for collections whose token URIs already point at ipfs.blanknetwork.com."""

    def __init__(
        self,
        gateway: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        gateway = gateway or settings.blanknetwork_gateway
        super().__init__(gateway, gateway, timeout, user_agent)


def decode_data_uri(data_uri: str) -> Any:
    """
    Decode a base64 JSON data URI.

    Args:
        data_uri: String of the form data:application/json;base64,<payload>

    Returns:
        The parsed JSON value

    Raises:
        InvalidDataURIError: If the prefix is wrong or the payload is not base64
        InvalidJSONError: If the decoded payload is not JSON
    """
    if not data_uri.startswith(DATA_URI_PREFIX):
        raise InvalidDataURIError(
            f"Invalid data URI format: {data_uri[:60]!r}",
            detail=f"expected prefix {DATA_URI_PREFIX!r}",
        )

    try:
        raw = base64.b64decode(data_uri[len(DATA_URI_PREFIX) :], validate=True)
    except binascii.Error as e:
        raise InvalidDataURIError("Data URI payload is not valid base64", detail=str(e)) from e

    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidJSONError("Data URI payload is not valid JSON", detail=str(e)) from e


async def data_uri_resolver(data_uri: str) -> Any:
    """Resolver for collections that store metadata on-chain as data URIs."""
    return decode_data_uri(data_uri)


def unwrap_metadata(payload: ResolverPayload) -> Metadata:
    """
    Normalise whatever a resolver returned into a metadata mapping.

    Accepts the metadata mapping itself, an httpx.Response, or an envelope
    object exposing the metadata as `.data`.

    Raises:
        InvalidJSONError: If no JSON object can be extracted
    """
    if isinstance(payload, httpx.Response):
        try:
            payload = payload.json()
        except ValueError as e:
            raise InvalidJSONError("Response body is not JSON", detail=str(e)) from e
    elif not isinstance(payload, Mapping) and getattr(payload, "data", None) is not None:
        payload = payload.data

    if not isinstance(payload, Mapping):
        raise InvalidJSONError(
            "Metadata is not a JSON object",
            detail=type(payload).__name__,
        )

    metadata: Metadata = dict(payload)  # type: ignore[assignment]
    return metadata


def default_resolver(config: Settings | None = None) -> TokenURIResolver:
    """
    Resolver used when the plugin is constructed without one.

    Args:
        config: Settings providing gateway, timeout and user agent.
            Defaults to the module settings.
    """
    config = config if config is not None else settings
    return IPFSResolver(
        gateway=config.ipfs_gateway,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )
