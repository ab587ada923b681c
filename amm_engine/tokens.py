"""Token metadata lookups.

Decimals are only needed by the stable curve, which normalizes both sides of
a pair to a common unit. The engine never owns this data; hosts provide a
TokenMetadata implementation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from amm_engine.errors import UnknownToken
from amm_engine.math.kernel import pow10


@runtime_checkable
class TokenMetadata(Protocol):
    """Read-only access to token decimals."""

    def decimals(self, token: str) -> int:
        """Number of decimals of a token.

        Raises:
            UnknownToken: If the token is not known
        """
        ...


class StaticTokenMetadata:
    """TokenMetadata backed by a fixed mapping of token -> decimals."""

    def __init__(self, decimals: Mapping[str, int] | None = None) -> None:
        self._decimals: dict[str, int] = dict(decimals or {})

    def decimals(self, token: str) -> int:
        try:
            return self._decimals[token]
        except KeyError as err:
            raise UnknownToken(f"No decimals registered for {token}") from err

    def __len__(self) -> int:
        return len(self._decimals)


def decimals_scale(metadata: TokenMetadata, token: str) -> int:
    """Scale factor 10**decimals for a token."""
    return pow10(metadata.decimals(token))
