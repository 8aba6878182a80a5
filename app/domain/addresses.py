"""EVM address normalization shared by the engine and its surfaces."""

from __future__ import annotations

from collections.abc import Iterable

from web3 import Web3


def domain_normalize_address(address: str) -> str:
    """Return the case-insensitive identity form of one address.

    Args:
        address: Address text.

    Returns:
        str: Lower-cased address without surrounding whitespace.

    Raises:
        ValueError: Raised when address is not a string.
    """

    if not isinstance(address, str):
        raise ValueError(f"address must be a string, got {address!r}")
    return address.strip().lower()


def domain_normalize_address_set(addresses: Iterable[str]) -> list[str]:
    """Normalize addresses, dropping blanks and duplicates while keeping order.

    Args:
        addresses: Candidate address values.

    Returns:
        list[str]: Distinct normalized addresses.

    Raises:
        ValueError: Raised when a value is not a string.
    """

    normalized_addresses: list[str] = []
    seen: set[str] = set()
    for address in addresses:
        normalized_address = domain_normalize_address(address)
        if not normalized_address or normalized_address in seen:
            continue
        seen.add(normalized_address)
        normalized_addresses.append(normalized_address)
    return normalized_addresses


def domain_is_evm_address(address: str) -> bool:
    """Return whether value is a syntactically valid EVM address."""

    if not isinstance(address, str):
        return False
    return bool(Web3.is_address(address.strip()))


__all__ = ["domain_is_evm_address", "domain_normalize_address", "domain_normalize_address_set"]
