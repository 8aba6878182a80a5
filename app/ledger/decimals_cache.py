"""Process-lifetime cache of token decimals exponents."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from app.domain import domain_normalize_address, domain_validate_decimals


class TokenDecimalsCache:
    """Read-through map of lower-cased token address to decimals.

    Entries are written at most once per token and never evicted. Concurrent
    misses for the same token may both fetch; the second write stores the same
    value, so no locking is used.
    """

    def __init__(self) -> None:
        self._decimals_by_token: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._decimals_by_token)

    def cache_get(self, token_address: str) -> int | None:
        """Return cached decimals for a token, None on miss."""

        return self._decimals_by_token.get(domain_normalize_address(token_address))

    def cache_put(self, token_address: str, decimals: int) -> None:
        """Store decimals for a token."""

        self._decimals_by_token[domain_normalize_address(token_address)] = domain_validate_decimals(decimals)

    async def cache_resolve(
        self,
        token_address: str,
        fetch_decimals: Callable[[str], Awaitable[int]],
        override: int | None = None,
    ) -> int:
        """Resolve decimals: fixed override first, then cache, then one fetch.

        Args:
            token_address: Token contract address.
            fetch_decimals: Coroutine function reading on-chain `decimals()`.
            override: Optional fixed exponent taking priority over everything.

        Returns:
            int: Decimals exponent.

        Raises:
            ValueError: Raised when the override or fetched value is out of range.
            BalanceReadError: Raised when the on-chain read fails.
        """

        if override is not None:
            return domain_validate_decimals(override)

        cached_decimals = self.cache_get(token_address)
        if cached_decimals is not None:
            return cached_decimals

        fetched_decimals = await fetch_decimals(token_address)
        self.cache_put(token_address, fetched_decimals)
        return domain_validate_decimals(fetched_decimals)


__all__ = ["TokenDecimalsCache"]
