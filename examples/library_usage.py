#!/usr/bin/env python3
"""
Example of driving skale-ops from Python instead of the CLI.
"""
import os
import sys

from skale_ops import (
    ManagerClient,
    Settings,
    SkaleOpsError,
    calculate_normal_bounty,
    grant_role,
    signer_from_env,
)


def main():
    """
    Show the normal bounty of node 0, then grant ADMIN_ROLE to an address.

    Expects ENDPOINT, ABI_FILEPATH, ACCOUNT and PRIVATE_KEY in the environment.
    """
    if len(sys.argv) != 2:
        print("usage: library_usage.py <address>")
        return 2

    try:
        settings = Settings.from_env(network=os.environ.get("NETWORK"))
        signer = signer_from_env("ACCOUNT", "PRIVATE_KEY")
        client = ManagerClient.from_settings(settings, signer=signer)
        client.assert_chain_id()

        bounty = calculate_normal_bounty(client, 0)
        print(f"Normal bounty for node 0: {bounty.after}")

        result = grant_role(client, sys.argv[1])
    except SkaleOpsError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Has admin role: {result.before} -> {result.after}")
    print(f"Transaction: {result.receipt.tx_hash}")
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
