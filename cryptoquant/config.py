"""
Configuration module for CryptoQuant.
The analytics engine itself takes explicit arguments; these settings wire the
provider, cache and service layers.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from decimal import Decimal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    APP_NAME: str = "CryptoQuant"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    
    # Data providers
    DATA_PROVIDER: str = "coinmarketcap"
    COINMARKETCAP_API_KEY: str = ""  # Required for the CoinMarketCap provider
    COINMARKETCAP_BASE_URL: str = "https://pro-api.coinmarketcap.com"
    BINANCE_BASE_URL: str = "https://api.binance.com"
    HTTP_TIMEOUT_SECONDS: float = 10.0
    
    # Rate limiting (sliding window over 60 seconds)
    RATE_LIMIT_REQUESTS_PER_MINUTE: int = Field(default=30, gt=0)
    
    # Result cache
    CACHE_TTL_SECONDS: int = Field(default=300, gt=0)
    CACHE_HISTORICAL_TTL_SECONDS: int = Field(default=600, gt=0)
    CACHE_MAX_KEYS: int = Field(default=1000, gt=0)
    
    # Analytics defaults
    RISK_FREE_RATE: Decimal = Decimal("0.05")  # Annual decimal: 0.05 == 5%
    DEFAULT_STRATEGY: str = "moderate"
    DEFAULT_TIMEFRAME: str = "90d"
    
    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    @field_validator('RISK_FREE_RATE')
    @classmethod
    def validate_risk_free_rate(cls, v: Decimal) -> Decimal:
        """Risk-free rate is an annual decimal, never a percentage."""
        if v < 0 or v > Decimal("0.5"):
            raise ValueError(
                "RISK_FREE_RATE must be an annual decimal between 0 and 0.5 (e.g. 0.05 for 5%)"
            )
        return v
    
    @field_validator('DATA_PROVIDER')
    @classmethod
    def validate_data_provider(cls, v: str) -> str:
        v = v.lower()
        if v not in ("coinmarketcap", "binance"):
            raise ValueError("DATA_PROVIDER must be 'coinmarketcap' or 'binance'")
        return v
    
    @field_validator('DEFAULT_STRATEGY')
    @classmethod
    def validate_default_strategy(cls, v: str) -> str:
        v = v.lower()
        if v not in ("conservative", "moderate", "aggressive"):
            raise ValueError("DEFAULT_STRATEGY must be conservative, moderate or aggressive")
        return v
    
    class Config:
        env_file = ".env"
        case_sensitive = True
    
    def validate_production_settings(self) -> None:
        """Validate settings for production environment."""
        if self.ENVIRONMENT == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if self.DATA_PROVIDER == "coinmarketcap" and not self.COINMARKETCAP_API_KEY:
                raise ValueError("COINMARKETCAP_API_KEY must be set in production")


# Global settings instance
settings = Settings()

# Validate settings on import (only in production)
if settings.ENVIRONMENT == "production":
    try:
        settings.validate_production_settings()
    except ValueError as e:
        import sys
        import logging
        logger = logging.getLogger(__name__)
        logger.critical(f"Production configuration error: {e}", exc_info=True)
        print(f"CRITICAL: Production configuration error: {e}", file=sys.stderr)
        sys.exit(1)
