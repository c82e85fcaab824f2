"""
NFT metadata shapes.

Attributes and metadata records are plain JSON objects as returned by
token URIs, typed with TypedDicts so results stay deep-equal to the
source JSON.
"""

from dataclasses import dataclass
from typing import Any

from typing_extensions import NotRequired, TypedDict

DEFAULT_RPM = 200


class Attribute(TypedDict):
    """A single trait on an NFT, e.g. {"trait_type": "Fur", "value": "Robot"}."""

    trait_type: str
    value: str


class Metadata(TypedDict):
    """Token metadata as served by the token URI."""

    image: NotRequired[str]
    attributes: NotRequired[list[Attribute]]


# One category per mapping: [{"Earring": ["Gold", "Silver"]}, {"Grin": [...]}]
TraitCategory = dict[str, list[str]]

Combination = list[Attribute]

# Anything a resolver may hand back: a metadata mapping or an envelope
ResolverPayload = Any


@dataclass(frozen=True, slots=True)
class RateLimit:
    """
    Fixed-delay rate limit for sequential contract and gateway calls.

    Attributes:
        requests_per_minute: Allowed calls per minute. 0 disables the limit.
    """

    requests_per_minute: int = DEFAULT_RPM

    def __post_init__(self) -> None:
        if self.requests_per_minute < 0:
            raise ValueError(
                f"requests_per_minute must be >= 0, got {self.requests_per_minute}"
            )

    @property
    def delay(self) -> float:
        """Seconds to wait between iterations."""
        if self.requests_per_minute == 0:
            return 0.0
        return 60 / self.requests_per_minute

    @classmethod
    def from_rpm(cls, rpm: int | None, default: int = DEFAULT_RPM) -> "RateLimit":
        """Build a rate limit, falling back to `default` when rpm is None."""
        return cls(default if rpm is None else rpm)
