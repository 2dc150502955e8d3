from types import SimpleNamespace

import pytest

from deployment.constants import BSC_TESTNET
from deployment.deployer import Deployer
from deployment.runner import DeploymentRunner

# Common constants
ESCROW_ADDRESS = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
OWNER_ADDRESS = "0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2"
DEPLOYER_ADDRESS = "0x4B20993Bc481177ec7E8f571ceCaE8A9e22C02db"
CREATION_TXN_HASH = "0x" + "ab" * 32
PLATFORM_FEE = 250

ESCROW_CONFIG = {
    "deployment": {"name": "gonana-escrow", "chain_id": 97},
    "contracts": ["GonanaEscrow"],
}


class TransactionReverted(Exception):
    pass


# Fake network collaborators
class FakeEscrow:
    def __init__(self, address=ESCROW_ADDRESS, platform_fee=PLATFORM_FEE, owner=OWNER_ADDRESS):
        self.address = address
        self.contract_type = SimpleNamespace(name="GonanaEscrow")
        self.fee = platform_fee
        self.owner_address = owner
        self.fee_error = None
        self.calls = []

    def platformFee(self):
        self.calls.append("platformFee")
        if self.fee_error:
            raise self.fee_error
        return self.fee

    def owner(self):
        self.calls.append("owner")
        return self.owner_address


class FakeReceipt:
    def __init__(self, contract_address=ESCROW_ADDRESS, txn_hash=CREATION_TXN_HASH):
        self.contract_address = contract_address
        self.txn_hash = txn_hash
        self.confirmation_error = None
        self.failed = False
        self.confirmations_awaited = 0

    def await_confirmations(self):
        if self.confirmation_error:
            raise self.confirmation_error
        self.confirmations_awaited += 1
        return self

    def raise_for_status(self):
        if self.failed:
            raise TransactionReverted(f"Transaction {self.txn_hash} reverted")


class FakeTransaction:
    def __init__(self, args):
        self.args = args
        self.sender = None


class FakeContainer:
    def __init__(self, name, instance):
        self.contract_type = SimpleNamespace(name=name)
        self.instance = instance
        self.at_calls = []

    def __call__(self, *args):
        return FakeTransaction(args)

    def at(self, address, txn_hash=None):
        self.at_calls.append((address, txn_hash))
        return self.instance


class FakeAccount:
    address = DEPLOYER_ADDRESS

    def __init__(self, receipt):
        self.receipt = receipt
        self.submit_error = None
        self.autosign = False
        self.sent = []

    def set_autosign(self, enabled):
        self.autosign = enabled

    def call(self, txn):
        if self.submit_error:
            raise self.submit_error
        self.sent.append(txn)
        return self.receipt


# Fixtures
@pytest.fixture
def escrow():
    return FakeEscrow()


@pytest.fixture
def receipt():
    return FakeReceipt()


@pytest.fixture
def escrow_container(escrow):
    return FakeContainer("GonanaEscrow", escrow)


@pytest.fixture
def account(receipt):
    return FakeAccount(receipt)


@pytest.fixture
def offline(monkeypatch):
    """Skips checks that need a connected provider."""
    monkeypatch.setattr(
        "deployment.deployer.validate_config",
        lambda config: int(config["deployment"]["chain_id"]),
    )
    monkeypatch.setattr(Deployer, "_print_deployment_info", lambda self: None)
    monkeypatch.setattr("deployment.deployer.active_network_choice", lambda: BSC_TESTNET)


@pytest.fixture
def deployer(offline, account, tmp_path):
    return Deployer(
        config=ESCROW_CONFIG, path=tmp_path / "gonana-escrow.yml", account=account, autosign=True
    )


@pytest.fixture
def runner(monkeypatch, deployer, escrow_container):
    monkeypatch.setattr("deployment.runner.get_contract_container", lambda name: escrow_container)
    return DeploymentRunner(deployer=deployer)
