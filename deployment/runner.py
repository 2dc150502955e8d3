from decimal import Decimal
from typing import Any, NamedTuple, Optional, Tuple

import click
from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress

from deployment.constants import (
    BASIS_POINTS_PER_PERCENT,
    BSC_TESTNET,
    ESCROW_CONTRACT_NAME,
    EXPLORER_NAME,
)
from deployment.deployer import Deployer
from deployment.networks import explorer_address_url, network_display_name, verify_command
from deployment.utils import get_contract_container


class ReadFailure(Exception):
    """Raised when a read-only call against a deployed contract fails."""


class WorkflowFailure(Exception):
    """Raised when any step of the deployment workflow fails."""

    def __init__(self, step: str, error: Exception):
        self.step = step
        self.error = error
        super().__init__(f"Failed to {step}: {type(error).__name__}: {error}")


class DeploymentSummary(NamedTuple):
    """Represents the post-deployment state of a single contract."""

    contract_name: str
    address: ChecksumAddress
    platform_fee: int
    owner: ChecksumAddress
    explorer_url: Optional[str]
    verify_command: str


def format_basis_points(basis_points: int) -> str:
    """Formats basis points as a percentage, e.g. 250 -> '2.5%'."""
    percent = Decimal(basis_points) / Decimal(BASIS_POINTS_PER_PERCENT)
    return f"{percent:f}%"


def format_summary(summary: DeploymentSummary) -> str:
    lines = [
        f"{summary.contract_name} deployed to: {summary.address}",
        "",
        "Contract details:",
        f"- Platform Fee: {summary.platform_fee} basis points "
        f"({format_basis_points(summary.platform_fee)})",
        f"- Owner: {summary.owner}",
        "",
    ]
    if summary.explorer_url:
        lines.extend([f"View on {EXPLORER_NAME}:", summary.explorer_url, ""])
    lines.extend(["To verify contract, run:", summary.verify_command])
    return "\n".join(lines)


class DeploymentRunner:
    """
    Deploys a single contract and reads back its post-deployment state.

    Every step runs strictly after the previous one; the first failure
    aborts the workflow with a WorkflowFailure naming the failed step.
    """

    def __init__(
        self,
        deployer: Deployer,
        contract_name: str = ESCROW_CONTRACT_NAME,
        network: str = BSC_TESTNET,
    ):
        self.deployer = deployer
        self.contract_name = contract_name
        self.network = network

    @staticmethod
    def _read(instance: ContractInstance, getter: str) -> Any:
        try:
            return getattr(instance, getter)()
        except Exception as e:
            raise ReadFailure(f"{getter}() call on {instance.address} failed: {e}") from e

    def read_state(self, instance: ContractInstance) -> Tuple[int, ChecksumAddress]:
        """Reads the platform fee (in basis points) and the owner of a deployed contract."""
        platform_fee = self._read(instance, "platformFee")
        owner = self._read(instance, "owner")
        return platform_fee, owner

    def run(self) -> DeploymentSummary:
        network_name = network_display_name(self.network)
        print(f"Deploying {self.contract_name} to {network_name}...")

        step = "resolve contract container"
        try:
            container = get_contract_container(self.contract_name)

            step = "submit deployment"
            handle = self.deployer.deploy(container)

            step = "confirm deployment"
            instance = handle.wait_for_deployment()

            step = "read contract address"
            address = handle.address

            step = "read contract state"
            platform_fee, owner = self.read_state(instance)
        except Exception as e:
            raise WorkflowFailure(step, e) from e

        return DeploymentSummary(
            contract_name=self.contract_name,
            address=address,
            platform_fee=platform_fee,
            owner=owner,
            explorer_url=explorer_address_url(address, network=self.network),
            verify_command=verify_command(
                contract_name=self.contract_name, address=address, network=self.network
            ),
        )


def execute(runner: DeploymentRunner) -> int:
    """Runs the deployment workflow and returns the process exit code."""
    try:
        summary = runner.run()
    except WorkflowFailure as failure:
        click.secho(str(failure), fg="red", err=True)
        return 1

    click.echo(format_summary(summary))
    return 0
