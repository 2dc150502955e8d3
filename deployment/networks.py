from typing import Optional

from ape import networks
from eth_typing import ChecksumAddress

from deployment.constants import (
    BSC_TESTNET,
    BSC_TESTNET_NAME,
    EXPLORER_BASE_URL,
    LOCAL_BLOCKCHAIN_ENVIRONMENTS,
    VERIFY_COMMAND_TEMPLATE,
)


def is_local_network() -> bool:
    """Returns True if the active provider is connected to a local development network."""
    return networks.provider.network.name in LOCAL_BLOCKCHAIN_ENVIRONMENTS


def active_network_choice() -> str:
    """Returns the '<ecosystem>:<network>' choice of the active provider, e.g. 'bsc:testnet'."""
    network = networks.provider.network
    return f"{network.ecosystem.name}:{network.name}"


def network_display_name(network: str) -> str:
    if network == BSC_TESTNET:
        return BSC_TESTNET_NAME
    return network


def explorer_address_url(address: ChecksumAddress, network: str = BSC_TESTNET) -> Optional[str]:
    """Returns the block explorer page for a deployed contract, if the network has one."""
    if network != BSC_TESTNET:
        return None
    return f"{EXPLORER_BASE_URL}/address/{address}"


def verify_command(contract_name: str, address: ChecksumAddress, network: str = BSC_TESTNET) -> str:
    """Returns the follow-up command that publishes the contract source to the explorer."""
    return VERIFY_COMMAND_TEMPLATE.format(
        network=network, contract_name=contract_name, address=address
    )
