"""Canonical ordering of token pairs.

A pool is stored under exactly one orientation of its pair, so (A, B) and
(B, A) always resolve to the same pool. Tokens are ordered by their
canonical byte representation: the ULEB128 length prefix followed by the
UTF-8 bytes of the identifier, compared lexicographically.
"""

from amm_engine.errors import IdenticalTokens

LESS_THAN = -1
EQUAL = 0
GREATER_THAN = 1


def _uleb128(n: int) -> bytes:
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def canonical_bytes(token: str) -> bytes:
    """Length-prefixed UTF-8 encoding of a token identifier."""
    raw = token.encode("utf-8")
    return _uleb128(len(raw)) + raw


def compare_tokens(token_a: str, token_b: str) -> int:
    """Compare two tokens by canonical bytes.

    Returns:
        LESS_THAN, EQUAL or GREATER_THAN
    """
    a, b = canonical_bytes(token_a), canonical_bytes(token_b)
    if a < b:
        return LESS_THAN
    if a > b:
        return GREATER_THAN
    return EQUAL


def is_sorted(token_a: str, token_b: str) -> bool:
    """True if (token_a, token_b) is the canonical orientation.

    Raises:
        IdenticalTokens: If both tokens are the same
    """
    order = compare_tokens(token_a, token_b)
    if order == EQUAL:
        raise IdenticalTokens(f"Pair needs two distinct tokens, got {token_a} twice")
    return order == LESS_THAN


def canonical_pair(token_a: str, token_b: str) -> tuple[str, str]:
    """Return the pair in canonical order."""
    if is_sorted(token_a, token_b):
        return token_a, token_b
    return token_b, token_a
