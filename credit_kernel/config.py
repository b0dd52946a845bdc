# config.py
from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ALCHEMY_API_KEY: str = ""
    ALCHEMY_BASE_URL: str = "https://{network}.g.alchemy.com"

    # Per-chain credentials; unset falls back to ALCHEMY_API_KEY
    ALCHEMY_API_KEY_ETHEREUM: Optional[str] = None
    ALCHEMY_API_KEY_POLYGON: Optional[str] = None
    ALCHEMY_API_KEY_ARBITRUM: Optional[str] = None
    ALCHEMY_API_KEY_OPTIMISM: Optional[str] = None
    ALCHEMY_API_KEY_BASE: Optional[str] = None
    ALCHEMY_API_KEY_AVALANCHE: Optional[str] = None
    ALCHEMY_API_KEY_BSC: Optional[str] = None
    ALCHEMY_API_KEY_FANTOM: Optional[str] = None
    ALCHEMY_API_KEY_ZKSYNC: Optional[str] = None

    ENABLE_ETHEREUM: bool = True
    ENABLE_POLYGON: bool = True
    ENABLE_ARBITRUM: bool = True
    ENABLE_OPTIMISM: bool = True
    ENABLE_BASE: bool = True
    ENABLE_AVALANCHE: bool = True
    ENABLE_BSC: bool = True
    ENABLE_FANTOM: bool = True
    ENABLE_ZKSYNC: bool = True

    MIN_SCORE: int = 300
    MAX_SCORE: int = 850
    PASS_THRESHOLD: int = 600

    FETCH_TIMEOUT_SECONDS: float = 10.0

    DEBUG: bool = False
    LOG_FORMAT: str = "console"
    PORT: int = 3000
    ALLOWED_ORIGINS: List[str] = ["https://app.platform.lat", "http://localhost:3000"]

    @model_validator(mode="after")
    def check_score_bounds(self):
        if self.MIN_SCORE >= self.MAX_SCORE:
            raise ValueError(
                f"MIN_SCORE ({self.MIN_SCORE}) must be lower than MAX_SCORE ({self.MAX_SCORE})"
            )
        if self.FETCH_TIMEOUT_SECONDS <= 0:
            raise ValueError("FETCH_TIMEOUT_SECONDS must be positive")
        return self

    def api_key_for(self, chain: str) -> str:
        """Credential for a chain, or the shared key when none is configured."""
        return getattr(self, f"ALCHEMY_API_KEY_{chain.upper()}", None) or self.ALCHEMY_API_KEY

    def is_chain_enabled(self, chain: str) -> bool:
        return getattr(self, f"ENABLE_{chain.upper()}", True)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
