"""ERC-20 on-chain reader adapter over an async JSON-RPC provider."""

from __future__ import annotations

from typing import Any, Final

from web3 import AsyncHTTPProvider, AsyncWeb3

from .errors import BalanceReadError
from .interfaces import TokenReaderPort

ERC20_ABI: Final[list[dict[str, Any]]] = [
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class Erc20OnchainAdapter(TokenReaderPort):
    """Adapter implementation for ERC-20 `balanceOf` and `decimals` view calls."""

    def __init__(self, rpc_url: str, request_timeout_seconds: float = 20.0, web3_client: AsyncWeb3 | None = None):
        """Initialize on-chain reader.

        Args:
            rpc_url: JSON-RPC endpoint URL.
            request_timeout_seconds: Provider request timeout in seconds.
            web3_client: Optional pre-built async Web3 client.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when rpc_url is blank.
        """

        normalized_rpc_url = rpc_url.strip()
        if not normalized_rpc_url:
            raise ValueError("rpc_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._rpc_url = normalized_rpc_url
        self._provider: AsyncHTTPProvider | None = None
        if web3_client is None:
            self._provider = AsyncHTTPProvider(normalized_rpc_url, request_kwargs={"timeout": request_timeout_seconds})
            web3_client = AsyncWeb3(self._provider)
        self._web3 = web3_client

    def adapter_source_name(self) -> str:
        """Return stable adapter source label.

        Returns:
            str: Source identifier.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "erc20_json_rpc"

    async def aclose(self) -> None:
        """Disconnect the HTTP provider session when this adapter created it."""

        if self._provider is not None:
            await self._provider.disconnect()
            self._provider = None

    async def adapter_token_balance_of(self, token_address: str, owner: str) -> int:
        """Return raw token balance of one owner in base units.

        Args:
            token_address: Token contract address.
            owner: Owner address.

        Returns:
            int: Unsigned balance in base units.

        Raises:
            BalanceReadError: Raised when addresses are invalid or the call fails.
        """

        contract = self._adapter_contract(token_address)
        try:
            owner_checksum = AsyncWeb3.to_checksum_address(owner.strip())
            raw_balance = await contract.functions.balanceOf(owner_checksum).call()
        except Exception as error:  # provider, transport and ABI decoding failures
            raise BalanceReadError(
                f"balanceOf failed token={token_address} owner={owner}: {error}",
                token_address=token_address,
                owner=owner,
            ) from error
        return int(raw_balance)

    async def adapter_token_decimals(self, token_address: str) -> int:
        """Return token decimals exponent.

        Args:
            token_address: Token contract address.

        Returns:
            int: Decimals exponent.

        Raises:
            BalanceReadError: Raised when the call fails.
        """

        contract = self._adapter_contract(token_address)
        try:
            decimals = await contract.functions.decimals().call()
        except Exception as error:  # provider, transport and ABI decoding failures
            raise BalanceReadError(
                f"decimals failed token={token_address}: {error}",
                token_address=token_address,
            ) from error
        return int(decimals)

    def _adapter_contract(self, token_address: str):
        try:
            checksum_address = AsyncWeb3.to_checksum_address(token_address.strip())
        except ValueError as error:
            raise BalanceReadError(f"invalid token address={token_address}", token_address=token_address) from error
        return self._web3.eth.contract(address=checksum_address, abi=ERC20_ABI)


__all__ = ["ERC20_ABI", "Erc20OnchainAdapter"]
