#!/usr/bin/python3

import sys

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.confirm import DeploymentAborted
from deployment.constants import BSC_TESTNET, ESCROW_PARAMS_FILEPATH
from deployment.deployer import Deployer
from deployment.options import autosign_option
from deployment.runner import DeploymentRunner, execute
from deployment.utils import DeploymentConfigError


@click.command(cls=ConnectedProviderCommand, name="deploy-escrow")
@network_option(default=BSC_TESTNET)
@account_option()
@autosign_option
def cli(network, account, autosign):
    """Deploy GonanaEscrow and print a summary of the deployed contract."""
    try:
        deployer = Deployer.from_yaml(
            filepath=ESCROW_PARAMS_FILEPATH, account=account, autosign=autosign
        )
    except (DeploymentConfigError, DeploymentAborted) as e:
        raise click.ClickException(str(e))

    runner = DeploymentRunner(deployer=deployer, network=deployer.network)
    sys.exit(execute(runner))


if __name__ == "__main__":
    cli()
