#!/usr/bin/env python3
"""
Level Deployment Script
Deploys missing level contracts for the active network and registers them

Usage:
    python scripts/deploy_contracts.py
    ACTIVE_NETWORK=sepolia python scripts/deploy_contracts.py
"""

from level_deployer.cli import main

if __name__ == "__main__":
    main()
