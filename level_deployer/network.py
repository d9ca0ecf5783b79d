"""
Network connection

Local networks get a plain HTTP provider against the node's unlocked
accounts. Remote networks sign locally with DEPLOYER_PRIVATE_KEY through
web3's signing middleware.
"""

from typing import List, Optional

from web3 import AsyncWeb3, AsyncHTTPProvider
from web3.middleware import SignAndSendRawMiddlewareBuilder

from .config import Network


async def connect(network: Network, private_key: Optional[str] = None, provider=None) -> AsyncWeb3:
    """Connect to the network and check it is listening.

    Errors raised by the liveness check propagate unchanged after the
    provider session is closed.
    """
    if provider is None:
        if network.local:
            print(f"📡 Connecting to '{network.provider_url}'...")
        provider = AsyncHTTPProvider(network.provider_url)

    w3 = AsyncWeb3(provider)

    private_key = private_key or network.private_key
    if private_key and not network.local:
        account = w3.eth.account.from_key(private_key)
        w3.middleware_onion.inject(SignAndSendRawMiddlewareBuilder.build(account), layer=0)
        w3.eth.default_account = account.address

    try:
        listening = await w3.net.listening
    except Exception:
        await disconnect(w3)
        raise

    if listening:
        print(f"[OK] Connected to {network.name}")
    else:
        print(f"[WARN] {network.name} node reports it is not listening")

    return w3


async def get_accounts(w3: AsyncWeb3) -> List[str]:
    """Accounts the client can send from: the signing account if set, else the node's"""
    if w3.eth.default_account:
        return [w3.eth.default_account]
    return await w3.eth.accounts


async def disconnect(w3: AsyncWeb3):
    """Close the HTTP session held by the provider"""
    if isinstance(w3.provider, AsyncHTTPProvider):
        await w3.provider.disconnect()
