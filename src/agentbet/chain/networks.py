"""Chain selector names understood by the workflows."""

from __future__ import annotations

from dataclasses import dataclass

from agentbet.exceptions import NetworkNotFoundError


@dataclass(frozen=True)
class Network:
    name: str
    chain_id: int
    is_testnet: bool


_NETWORKS: dict[str, Network] = {
    network.name: network
    for network in (
        Network("ethereum-mainnet", 1, is_testnet=False),
        Network("ethereum-mainnet-base-1", 8453, is_testnet=False),
        Network("ethereum-mainnet-arbitrum-1", 42161, is_testnet=False),
        Network("ethereum-testnet-sepolia", 11155111, is_testnet=True),
        Network("ethereum-testnet-sepolia-base-1", 84532, is_testnet=True),
        Network("ethereum-testnet-sepolia-arbitrum-1", 421614, is_testnet=True),
        Network("ethereum-testnet-sepolia-optimism-1", 11155420, is_testnet=True),
        Network("avalanche-testnet-fuji", 43113, is_testnet=True),
        Network("polygon-testnet-amoy", 80002, is_testnet=True),
    )
}


def resolve_network(chain_selector_name: str, *, is_testnet: bool = True) -> Network:
    """Look up a network by chain selector name.

    Raises:
        NetworkNotFoundError: If the name is unknown or not on the requested net type.
    """
    network = _NETWORKS.get(chain_selector_name.strip())
    if network is None or network.is_testnet != is_testnet:
        raise NetworkNotFoundError(
            chain_selector_name, supported_networks(is_testnet=is_testnet)
        )
    return network


def supported_networks(*, is_testnet: bool | None = None) -> list[str]:
    return sorted(
        name
        for name, network in _NETWORKS.items()
        if is_testnet is None or network.is_testnet == is_testnet
    )
