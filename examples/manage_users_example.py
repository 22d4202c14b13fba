#!/usr/bin/env python3
"""
Example of deploying the users contract and exercising it.

This example shows how to:
1. Build a DeployConfig from a bundled network
2. Upload and instantiate the contract
3. Add and remove a user, querying the contract in between

Requires TERRA_MNEMONIC in the environment; TERRA_NETWORK defaults to localterra.
"""
import os

from wasm_deployer import (
    DeployConfig,
    DeployerError,
    NetworkConfig,
    UsersContract,
    check_node,
    create_client,
    create_wallet,
    run_deploy,
)


def main():
    mnemonic = os.environ.get("TERRA_MNEMONIC")
    if not mnemonic:
        print("ERROR: TERRA_MNEMONIC environment variable is required")
        return

    print("Available networks:")
    for network_name in NetworkConfig.load_networks().keys():
        print(f"  - {network_name}")
    print()

    network = os.environ.get("TERRA_NETWORK", "localterra")
    config = DeployConfig.from_network(network, mnemonic, verbose=True)

    try:
        check_node(config.lcd_url, config.chain_id)
        terra = create_client(config.lcd_url, config.chain_id)
        wallet = create_wallet(terra, config.mnemonic.get_secret_value())

        deployed = run_deploy(config, terra=terra, wallet=wallet)
        contract = UsersContract(terra, wallet, deployed.contract_address)

        contract.add_user(deployed.wallet_address)
        print(f"Users after add: {contract.get_users()}")
        print(f"Owner registered: {contract.get_user(deployed.wallet_address)}")

        contract.remove_user(deployed.wallet_address)
        print(f"Users after remove: {contract.get_users()}")
    except DeployerError as e:
        print(f"Error: {str(e)}")


if __name__ == "__main__":
    main()
