from collections import OrderedDict

import click
import pytest
from ape.utils import ZERO_ADDRESS
from eth_utils import to_checksum_address

from deployment.confirm import DeploymentAborted, _confirm_resolution, _continue
from deployment.types import ChecksumAddress
from tests.conftest import OWNER_ADDRESS


@pytest.fixture
def prompts(monkeypatch):
    asked = []

    def answer_with(*answers):
        answers = iter(answers)

        def fake_input(prompt):
            asked.append(prompt)
            return next(answers)

        monkeypatch.setattr("builtins.input", fake_input)
        return asked

    return answer_with


def test_continue(prompts):
    prompts("y")
    _continue()

    prompts(" N ")
    with pytest.raises(DeploymentAborted):
        _continue()


def test_confirm_without_constructor_parameters(prompts, capsys):
    asked = prompts("y")
    _confirm_resolution(OrderedDict(), "GonanaEscrow", "BNB Chain Testnet")

    assert asked == ["Deploy GonanaEscrow to BNB Chain Testnet Y/N? "]
    assert "No constructor parameters for GonanaEscrow" in capsys.readouterr().out


def test_confirm_constructor_parameters(prompts, capsys):
    asked = prompts("y")
    params = OrderedDict(_platformFee=250, _treasury=OWNER_ADDRESS)
    _confirm_resolution(params, "GonanaEscrow", "BNB Chain Testnet")

    assert len(asked) == 1
    out = capsys.readouterr().out
    assert "\t_platformFee=250" in out
    assert f"\t_treasury={OWNER_ADDRESS}" in out


def test_zero_address_needs_extra_confirmation(prompts):
    asked = prompts("y", "n")
    params = OrderedDict(_treasury=ZERO_ADDRESS)

    with pytest.raises(DeploymentAborted):
        _confirm_resolution(params, "GonanaEscrow", "BNB Chain Testnet")
    assert len(asked) == 2
    assert asked[1].startswith("Zero Address detected")


def test_checksum_address_param_type():
    param_type = ChecksumAddress()
    assert param_type.convert(OWNER_ADDRESS.lower(), None, None) == to_checksum_address(
        OWNER_ADDRESS.lower()
    )

    with pytest.raises(click.BadParameter, match="not a valid ethereum address"):
        param_type.convert("0xnotanaddress", None, None)
