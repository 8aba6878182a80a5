"""Fault-tolerant on-chain balance collection across addresses and tokens."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
import logging

from app.adapters import BalanceReadError, TokenReaderPort
from app.domain import TokenBalance, domain_normalize_address, domain_units_to_decimal

from .decimals_cache import TokenDecimalsCache

logger = logging.getLogger(__name__)

FALLBACK_DECIMALS = 18


class TokenBalanceCollector:
    """Collect token balances where one failed lookup only zeroes that lookup."""

    def __init__(
        self,
        token_reader: TokenReaderPort,
        decimals_cache: TokenDecimalsCache,
        decimals_overrides: dict[str, int] | None = None,
    ):
        """Initialize collector dependencies.

        Args:
            token_reader: Adapter for ERC-20 reads.
            decimals_cache: Shared process-lifetime decimals cache.
            decimals_overrides: Optional fixed decimals per token address.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if token_reader is None:
            raise ValueError("token_reader must not be None")
        if decimals_cache is None:
            raise ValueError("decimals_cache must not be None")

        self._token_reader = token_reader
        self._decimals_cache = decimals_cache
        self._decimals_overrides = {
            domain_normalize_address(token): decimals for token, decimals in (decimals_overrides or {}).items()
        }

    async def balance_resolve_decimals(self, token_address: str) -> int:
        """Resolve decimals for one token through override, cache, then chain.

        Args:
            token_address: Token contract address.

        Returns:
            int: Decimals exponent.

        Raises:
            BalanceReadError: Raised when the on-chain read fails on a cache miss.
        """

        return await self._decimals_cache.cache_resolve(
            token_address,
            self._token_reader.adapter_token_decimals,
            override=self._decimals_overrides.get(domain_normalize_address(token_address)),
        )

    async def balance_of_base_units(self, token_address: str, owner: str) -> int:
        """Return one owner's balance, `0` when the lookup fails."""

        try:
            return await self._token_reader.adapter_token_balance_of(token_address, owner)
        except BalanceReadError as error:
            logger.error("balanceOf failed token=%s owner=%s: %s", token_address, owner, error)
            return 0

    async def balance_total_base_units(self, token_address: str, owners: Iterable[str]) -> int:
        """Return the summed balance of many owners for one token.

        Lookups run concurrently; each failed lookup contributes `0`.

        Args:
            token_address: Token contract address.
            owners: Owner addresses.

        Returns:
            int: Summed balance in base units.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        balances = await asyncio.gather(*(self.balance_of_base_units(token_address, owner) for owner in owners))
        return sum(balances, 0)

    async def balance_token_balances(self, owner: str, token_addresses: Iterable[str]) -> list[TokenBalance]:
        """Return one owner's balances for several tokens, fetched concurrently.

        Args:
            owner: Owner address.
            token_addresses: Token contract addresses.

        Returns:
            list[TokenBalance]: One entry per token in input order; failed
            lookups report a zero balance.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return list(
            await asyncio.gather(*(self._balance_token_balance(owner, token) for token in token_addresses))
        )

    async def balance_total_decimal_by_token(
        self,
        owners: Iterable[str],
        token_addresses: Iterable[str],
    ) -> dict[str, float]:
        """Return per-token decimal totals summed over owners.

        Args:
            owners: Owner addresses.
            token_addresses: Token contract addresses.

        Returns:
            dict[str, float]: Total balance in token units keyed by normalized token address.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        normalized_tokens = list(dict.fromkeys(domain_normalize_address(token) for token in token_addresses))
        totals = {token: 0.0 for token in normalized_tokens}
        for owner in owners:
            for token_balance in await self.balance_token_balances(owner, normalized_tokens):
                totals[token_balance.token_address] += domain_units_to_decimal(
                    token_balance.balance_base_units,
                    token_balance.decimals,
                )
        return totals

    async def _balance_token_balance(self, owner: str, token_address: str) -> TokenBalance:
        try:
            decimals, balance = await asyncio.gather(
                self.balance_resolve_decimals(token_address),
                self._token_reader.adapter_token_balance_of(token_address, owner),
            )
        except BalanceReadError as error:
            logger.error("Failed to fetch balance for %s token=%s: %s", owner, token_address, error)
            return TokenBalance(
                owner=owner,
                token_address=domain_normalize_address(token_address),
                balance_base_units=0,
                decimals=FALLBACK_DECIMALS,
            )
        return TokenBalance(
            owner=owner,
            token_address=domain_normalize_address(token_address),
            balance_base_units=balance,
            decimals=decimals,
        )


__all__ = ["FALLBACK_DECIMALS", "TokenBalanceCollector"]
