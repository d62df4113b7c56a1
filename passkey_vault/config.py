import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from passkey_vault.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()

# Deployed Passkey NFT contract (address.name)
DEFAULT_CONTRACT_ID = "SP2FY55DK4NESNH6E5CJSNZP2CQ5PZ5BX64B29FYG.passkey-nft-v3"
SERVICE_NAME = "Passkey NFT Vault Chainhook Webhook"


@dataclass
class APIConfig:
    # Shared secret expected in "Authorization: Bearer <token>"; empty disables auth
    webhook_auth: str = os.getenv("CHAINHOOK_AUTH_TOKEN", "")


@dataclass
class DiscordConfig:
    webhook_url: str = os.getenv("DISCORD_WEBHOOK_URL", "")
    timeout_seconds: float = float(os.getenv("DISCORD_TIMEOUT_SECONDS", "5"))
    bot_name: str = os.getenv("DISCORD_BOT_NAME", "")


@dataclass
class NetworkConfig:
    network: str = os.getenv("NETWORK", "mainnet")


@dataclass
class ChainhookConfig:
    contract_id: str = os.getenv("CHAINHOOK_CONTRACT_ID", DEFAULT_CONTRACT_ID)
    deduplicate_blocks: bool = (
        os.getenv("CHAINHOOK_DEDUPLICATE_BLOCKS", "true").lower() == "true"
    )


@dataclass
class Config:
    api: APIConfig = field(default_factory=APIConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    chainhook: ChainhookConfig = field(default_factory=ChainhookConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        if config.network.network not in ("mainnet", "testnet"):
            logger.warning(
                f"Unknown network '{config.network.network}', explorer links will use testnet"
            )
        if not config.api.webhook_auth:
            logger.warning("CHAINHOOK_AUTH_TOKEN is not set, webhook is unauthenticated")
        logger.info("Configuration loaded successfully")
        return config


@dataclass(frozen=True)
class ChainhookSettings:
    """Immutable settings handed to the chainhook pipeline at construction."""

    contract_id: str = DEFAULT_CONTRACT_ID
    network: str = "mainnet"
    auth_token: str = ""
    discord_webhook_url: str = ""
    discord_timeout_seconds: float = 5.0
    discord_bot_name: str = ""
    deduplicate_blocks: bool = True
    service_name: str = SERVICE_NAME

    @classmethod
    def from_config(cls, cfg: Config) -> "ChainhookSettings":
        return cls(
            contract_id=cfg.chainhook.contract_id,
            network=cfg.network.network,
            auth_token=cfg.api.webhook_auth,
            discord_webhook_url=cfg.discord.webhook_url,
            discord_timeout_seconds=cfg.discord.timeout_seconds,
            discord_bot_name=cfg.discord.bot_name,
            deduplicate_blocks=cfg.chainhook.deduplicate_blocks,
        )

    @property
    def expected_authorization(self) -> str:
        """Full header value the indexer must send, empty when auth is disabled."""
        if not self.auth_token:
            return ""
        if self.auth_token.startswith("Bearer "):
            return self.auth_token
        return f"Bearer {self.auth_token}"


# Global configuration instance
config = Config.load()
