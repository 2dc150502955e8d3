import os
from pathlib import Path
from typing import Dict, List

import yaml
from ape import networks, project
from ape.contracts import ContractContainer, ContractInstance

from deployment.networks import is_local_network


class DeploymentConfigError(ValueError):
    pass


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def get_contract_names(config: Dict) -> List[str]:
    """Returns the names of the contracts declared in a deployment config, in order."""
    contracts = config["contracts"]
    if not isinstance(contracts, list):
        raise DeploymentConfigError("'contracts' must be a list in deployment YAML.")

    contract_names = list()
    for contract_info in contracts:
        if isinstance(contract_info, str):
            contract_names.append(contract_info)
        elif isinstance(contract_info, dict) and len(contract_info) == 1:
            contract_name, contract_data = list(contract_info.items())[0]
            if contract_data is not None and not isinstance(contract_data, dict):
                raise DeploymentConfigError(f"Malformed config for {contract_name}.")
            contract_names.append(contract_name)
        else:
            raise DeploymentConfigError("Malformed contracts entry in deployment YAML.")

    return contract_names


def validate_config(config: Dict) -> int:
    """
    Checks that the deployment config is well-formed and that it targets
    the chain the active provider is connected to. Returns the config chain ID.
    """
    print("Validating parameters YAML...")

    if not config:
        raise DeploymentConfigError("Deployment YAML is empty.")
    if not isinstance(config, dict):
        raise DeploymentConfigError("Deployment YAML must be a mapping.")

    deployment = config.get("deployment")
    if not deployment:
        raise DeploymentConfigError("deployment is not set in params file.")
    if not isinstance(deployment, dict):
        raise DeploymentConfigError("deployment must be a mapping in params file.")

    config_chain_id = deployment.get("chain_id")
    if not config_chain_id:
        raise DeploymentConfigError("chain_id is not set in params file.")
    try:
        config_chain_id = int(config_chain_id)
    except (TypeError, ValueError):
        raise DeploymentConfigError(f"chain_id '{config_chain_id}' is not an integer.")

    contracts = config.get("contracts")
    if not contracts:
        raise DeploymentConfigError("Deployment YAML missing 'contracts' field.")
    get_contract_names(config)

    chain_mismatch = config_chain_id != networks.provider.network.chain_id
    live_deployment = not is_local_network()
    if chain_mismatch and live_deployment:
        raise DeploymentConfigError(
            f"chain_id in params file ({config_chain_id}) does not match "
            f"chain_id of current network ({networks.provider.network.chain_id})."
        )

    return config_chain_id


def check_etherscan_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the appropriate API key environment variable is set.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to use this script.")
    ecosystem_name = networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if not explorer_envvar:
        raise ValueError(f"No explorer API key is known for the '{ecosystem_name}' ecosystem.")
    api_key = os.environ.get(explorer_envvar)
    if not api_key:
        raise ValueError(f"{explorer_envvar} is not set.")


def verify_contracts(contracts: List[ContractInstance]) -> None:
    explorer = networks.provider.network.explorer
    if explorer is None:
        raise ValueError(f"No explorer available for network '{networks.provider.network.name}'.")
    for instance in contracts:
        print(f"(i) Verifying {instance.contract_type.name} at {instance.address}...")
        explorer.publish_contract(instance.address)


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container
