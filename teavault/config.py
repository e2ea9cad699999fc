"""
Configuration settings for TeaVault

Loads environment variables and provides vault/venue configuration.
"""
import logging
import os
from dotenv import load_dotenv

from .constants import (
    DEFAULT_BURN_CODE,
    DEFAULT_FEE_CAP,
    DEFAULT_HARVEST_CODE,
    DEFAULT_LP_CALL_PATH,
    DEFAULT_MINT_CODE,
    DEFAULT_SWAP_CALL_PATH,
    JIT_PROTECTION_SECONDS,
    MAX_POSITION_LENGTH,
)

# Load environment variables from .env file
load_dotenv()


class Settings:
    """TeaVault settings"""

    # Logging
    LOG_LEVEL: str = os.getenv("TEAVAULT_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # Ambient venue call paths / command codes
    SWAP_CALL_PATH: int = int(os.getenv("AMBIENT_SWAP_CALL_PATH", DEFAULT_SWAP_CALL_PATH))
    LP_CALL_PATH: int = int(os.getenv("AMBIENT_LP_CALL_PATH", DEFAULT_LP_CALL_PATH))
    MINT_CODE: int = int(os.getenv("AMBIENT_MINT_CODE", DEFAULT_MINT_CODE))
    BURN_CODE: int = int(os.getenv("AMBIENT_BURN_CODE", DEFAULT_BURN_CODE))
    HARVEST_CODE: int = int(os.getenv("AMBIENT_HARVEST_CODE", DEFAULT_HARVEST_CODE))

    # Vault logic defaults
    MAX_POSITIONS: int = int(os.getenv("TEAVAULT_MAX_POSITIONS", MAX_POSITION_LENGTH))
    JIT_PROTECTION_SECONDS: int = int(os.getenv("TEAVAULT_JIT_PROTECTION_SECONDS", JIT_PROTECTION_SECONDS))
    DEFAULT_FEE_CAP: int = int(os.getenv("TEAVAULT_DEFAULT_FEE_CAP", DEFAULT_FEE_CAP))

    def call_paths(self):
        """Venue call paths from settings"""
        from .venue.base import VenueCallPaths

        return VenueCallPaths(
            swap_call_path=self.SWAP_CALL_PATH,
            lp_call_path=self.LP_CALL_PATH,
            mint_code=self.MINT_CODE,
            burn_code=self.BURN_CODE,
            harvest_code=self.HARVEST_CODE,
        )


# Create global settings instance
settings = Settings()


def configure_logging(level: str = None) -> None:
    """Configure root logging from settings"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
