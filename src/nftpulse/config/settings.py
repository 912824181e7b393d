import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from ..api.events import DEFAULT_HOST
from ..models.types import Chain

# Resolve .env relative to this file so it's found regardless of CWD
# (e.g. when launched via `textual run --dev`)
_ENV_FILE = Path(__file__).resolve().parent.parent.parent.parent / ".env"
load_dotenv(_ENV_FILE)


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_HOST
    chain: Chain = Chain.Mainnet
    timeout: float = 15.0
    collection_slug: str | None = None  # collection shown on the "c" screen
    account_address: str | None = None  # wallet shown on the "a" screen


def load_settings() -> Settings:
    missing = [var for var in ("NFTPULSE_API_KEY",) if not os.getenv(var)]
    if missing:
        raise EnvironmentError(f"Missing required environment variables: {missing}")

    raw_chain = os.getenv("NFTPULSE_CHAIN", Chain.Mainnet.value)
    try:
        chain = Chain(raw_chain)
    except ValueError:
        raise EnvironmentError(
            f"NFTPULSE_CHAIN={raw_chain!r} is not one of {[c.value for c in Chain]}"
        ) from None

    raw_timeout = os.getenv("NFTPULSE_TIMEOUT", "15")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise EnvironmentError(f"NFTPULSE_TIMEOUT={raw_timeout!r} is not a number") from None

    return Settings(
        api_key=os.environ["NFTPULSE_API_KEY"],
        base_url=os.getenv("NFTPULSE_BASE_URL") or DEFAULT_HOST,
        chain=chain,
        timeout=timeout,
        collection_slug=os.getenv("NFTPULSE_COLLECTION") or None,
        account_address=os.getenv("NFTPULSE_ACCOUNT") or None,
    )
