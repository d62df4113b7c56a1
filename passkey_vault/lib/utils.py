"""Small helpers shared across the service."""

EXPLORER_BASE_URL = "https://explorer.hiro.so"


def short_hash(tx_hash: str, head: int = 8, tail: int = 6) -> str:
    """Abbreviate a transaction hash as `<first 8>...<last 6>`."""
    if len(tx_hash) <= head + tail:
        return tx_hash
    return f"{tx_hash[:head]}...{tx_hash[-tail:]}"


def explorer_tx_url(tx_hash: str, network: str = "mainnet") -> str:
    """Link to a transaction on the Hiro explorer for the given network."""
    chain = "mainnet" if network == "mainnet" else "testnet"
    return f"{EXPLORER_BASE_URL}/txid/{tx_hash}?chain={chain}"
