"""
Deployment confirmation prompt
"""

import asyncio

from .config import Network


async def confirm_deployment(network: Network, prompt_on_local: bool = True) -> bool:
    """Ask the operator to confirm. Only an exact 'y' counts as yes."""
    if network.local and not prompt_on_local:
        return True

    try:
        answer = await asyncio.to_thread(input, "Confirm deployment? (y/n): ")
    except EOFError:
        return False

    return answer.strip() == "y"
