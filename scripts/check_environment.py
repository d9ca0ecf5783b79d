#!/usr/bin/env python3
"""
Level Deployer Environment Check Script

Validates environment configuration, build artifacts and network
connectivity. Run this before deploying to a new network.
"""

from level_deployer.preflight import main

if __name__ == "__main__":
    main()
