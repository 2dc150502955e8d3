import click

from deployment.constants import ESCROW_CONTRACT_NAME
from deployment.types import ChecksumAddress

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without prompting for confirmation.",
    is_flag=True,
    default=False,
)

contract_name_option = click.option(
    "--contract-name",
    "-c",
    help="Name of the deployed contract",
    type=click.STRING,
    default=ESCROW_CONTRACT_NAME,
    show_default=True,
)

address_option = click.option(
    "--address",
    "-a",
    help="Address of the deployed contract",
    type=ChecksumAddress(),
    required=True,
)
