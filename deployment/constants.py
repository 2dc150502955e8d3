from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ESCROW_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "bsc-testnet" / "gonana-escrow.yml"

#
# Networks
#

LOCAL_BLOCKCHAIN_ENVIRONMENTS = ["local"]

BSC_TESTNET = "bsc:testnet"
BSC_TESTNET_NAME = "BNB Chain Testnet"
BSC_TESTNET_CHAIN_ID = 97

#
# Block Explorer
#

EXPLORER_NAME = "BscScan"
EXPLORER_BASE_URL = "https://testnet.bscscan.com"

VERIFY_COMMAND_TEMPLATE = (
    "ape run verify --network {network} --contract-name {contract_name} --address {address}"
)

#
# Contracts
#

ESCROW_CONTRACT_NAME = "GonanaEscrow"

# 100 basis points == 1%
BASIS_POINTS_PER_PERCENT = 100
