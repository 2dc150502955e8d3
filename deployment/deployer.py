import typing
from collections import OrderedDict
from pathlib import Path
from typing import Any, List

from ape import networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from eth_typing import ChecksumAddress

from deployment.confirm import _confirm_resolution, _continue
from deployment.networks import active_network_choice, network_display_name
from deployment.utils import (
    DeploymentConfigError,
    _load_yaml,
    get_contract_names,
    validate_config,
)

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"


class AddressUnavailable(Exception):
    """Raised when a contract address is requested before the deployment is confirmed."""


class DeploymentHandle:
    """
    A submitted contract creation transaction.

    The contract address only becomes available once ``wait_for_deployment``
    has returned; the receipt is awaited exactly once.
    """

    def __init__(self, container: ContractContainer, receipt: ReceiptAPI):
        self.container = container
        self.receipt = receipt
        self._instance: typing.Optional[ContractInstance] = None

    @property
    def contract_name(self) -> str:
        return self.container.contract_type.name

    @property
    def confirmed(self) -> bool:
        return self._instance is not None

    def wait_for_deployment(self) -> ContractInstance:
        """Blocks until the creation transaction is confirmed and returns the deployed instance."""
        if self._instance is not None:
            return self._instance

        print(
            f"Awaiting confirmation of {self.contract_name} deployment ({self.receipt.txn_hash})..."
        )
        self.receipt.await_confirmations()
        self.receipt.raise_for_status()

        address = self.receipt.contract_address
        if not address:
            raise AddressUnavailable(
                f"Transaction {self.receipt.txn_hash} did not create "
                f"a {self.contract_name} contract."
            )

        self._instance = self.container.at(address, txn_hash=self.receipt.txn_hash)
        return self._instance

    @property
    def address(self) -> ChecksumAddress:
        if self._instance is None:
            raise AddressUnavailable(
                f"{self.contract_name} deployment ({self.receipt.txn_hash}) is not confirmed yet."
            )
        return self._instance.address


class Transactor:
    """
    Represents an ape account, optionally unlocked for autosigning.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
            if hasattr(self._account, "set_autosign"):
                # only keyfile accounts can be unlocked for autosigning
                self._account.set_autosign(True)
        self._autosign = autosign

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account


class Deployer(Transactor):
    """
    Represents an ape account plus a validated deployment config,
    plus confirmed submission of contract creation transactions.
    """

    def __init__(
        self,
        config: typing.Dict,
        path: Path,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        super().__init__(account, autosign)

        self.path = path
        self.config = config
        self.chain_id = validate_config(config=self.config)
        self.network = active_network_choice()
        self.constructor_parameters = self._get_constructor_parameters(self.config)

        self._print_deployment_info()

        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    @classmethod
    def from_yaml(cls, filepath: Path, *args, **kwargs) -> "Deployer":
        config = _load_yaml(filepath)
        return cls(config=config, path=filepath, *args, **kwargs)

    @staticmethod
    def _get_constructor_parameters(config: typing.Dict) -> typing.Dict[str, OrderedDict]:
        parameters = OrderedDict()
        contract_names = get_contract_names(config)
        for contract_name, contract_info in zip(contract_names, config["contracts"]):
            contract_parameters = OrderedDict()
            if isinstance(contract_info, dict):
                contract_data = contract_info[contract_name] or dict()
                raw_parameters = contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY) or dict()
                if not isinstance(raw_parameters, dict):
                    raise DeploymentConfigError(
                        f"Malformed constructor parameter config for {contract_name}."
                    )
                contract_parameters.update(raw_parameters)
            parameters[contract_name] = contract_parameters

        return parameters

    def constructor_args(self, contract_name: str) -> List[Any]:
        """Returns the constructor arguments of a single contract, in declaration order."""
        try:
            parameters = self.constructor_parameters[contract_name]
        except KeyError:
            raise DeploymentConfigError(f"{contract_name} is not declared in {self.path}.")
        return list(parameters.values())

    def deploy(self, container: ContractContainer) -> DeploymentHandle:
        """
        Sends the creation transaction for a contract and wraps its receipt.

        The provider may already block here until the receipt has the required
        confirmations, and raise if the transaction reverted.
        """
        contract_name = container.contract_type.name
        if not self._autosign:
            _confirm_resolution(
                self.constructor_parameters.get(contract_name, OrderedDict()),
                contract_name,
                network_display_name(self.network),
            )

        txn = container(*self.constructor_args(contract_name))
        txn.sender = self._account.address
        print(f"\nSubmitting {contract_name} creation transaction...")
        receipt = self._account.call(txn)
        return DeploymentHandle(container=container, receipt=receipt)

    def _print_deployment_info(self):
        print(
            f"Account: {self.get_account().address}",
            f"Config: {self.path}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )
