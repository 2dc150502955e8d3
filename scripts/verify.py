import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from deployment.options import address_option, contract_name_option
from deployment.utils import check_etherscan_plugin, get_contract_container, verify_contracts


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@contract_name_option
@address_option
def cli(network, contract_name, address):
    """Publish the source of a deployed contract to the network's block explorer."""
    check_etherscan_plugin()

    contract_container = get_contract_container(contract_name)
    contract_instance = contract_container.at(address)

    # check whether contract is a proxy
    proxy_info = networks.provider.network.ecosystem.get_proxy_info(contract_instance.address)
    if proxy_info:
        # we have an instance of a proxy contract, but need the underlying implementation
        click.echo(
            f"Proxy contract detected; verifying implementation contract at {proxy_info.target}"
        )
        contract_instance = contract_container.at(proxy_info.target)

    verify_contracts([contract_instance])


if __name__ == "__main__":
    cli()
