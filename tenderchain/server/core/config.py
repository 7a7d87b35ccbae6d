"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class ChainConfig(BaseModel):
    """Blockchain RPC and contract configuration."""

    rpc_url: str = Field(
        default="https://ethereum-sepolia-rpc.publicnode.com",
        alias="CHAIN_RPC_URL",
        description="JSON-RPC endpoint of the chain the contracts are deployed on",
    )
    chain_id: int = Field(default=11155111, alias="CHAIN_ID", description="Chain id (Sepolia by default)")
    tender_contract_address: str = Field(
        default="0x0000000000000000000000000000000000000000",
        alias="TENDER_CONTRACT_ADDRESS",
        description="Address of the tender registry contract",
    )
    bid_contract_address: str = Field(
        default="0x0000000000000000000000000000000000000000",
        alias="BID_CONTRACT_ADDRESS",
        description="Address of the bid submission contract",
    )

    model_config = {"populate_by_name": True}


class TenderCatalogConfig(BaseModel):
    """Tender listing cache and fetch tuning."""

    ttl_seconds: float = Field(
        default=300.0, alias="TENDER_CACHE_TTL_SECONDS", description="How long a tender listing stays fresh"
    )
    batch_size: int = Field(
        default=10, ge=1, alias="TENDER_FETCH_BATCH_SIZE", description="Tenders read concurrently per batch"
    )
    count_timeout: float = Field(
        default=10.0, alias="TENDER_COUNT_TIMEOUT_SECONDS", description="Timeout for reading the tender count"
    )
    fetch_timeout: float = Field(
        default=30.0, alias="TENDER_FETCH_TIMEOUT_SECONDS", description="Timeout for reading all tenders"
    )

    model_config = {"populate_by_name": True}


class StorageConfig(BaseModel):
    """Document storage gateway configuration."""

    gateway_url: str = Field(
        default="http://storage-gateway:8080",
        alias="STORAGE_GATEWAY_URL",
        description="Base URL of the storage gateway",
    )
    api_token: Optional[str] = Field(
        default=None, alias="STORAGE_API_TOKEN", description="Bearer token for the storage gateway"
    )
    timeout: float = Field(default=120.0, alias="STORAGE_TIMEOUT_SECONDS", description="Gateway request timeout")
    service_address: Optional[str] = Field(
        default=None,
        alias="STORAGE_SERVICE_ADDRESS",
        description="Storage service to approve for payments (resolved from the gateway when unset)",
    )
    payment_token: str = Field(default="USDFC", alias="STORAGE_PAYMENT_TOKEN", description="Payment token symbol")
    deposit_amount: str = Field(
        default="5", alias="STORAGE_DEPOSIT_AMOUNT", description="One-time deposit, in whole tokens"
    )
    rate_allowance: str = Field(
        default="1", alias="STORAGE_RATE_ALLOWANCE", description="Per-epoch rate allowance, in whole tokens"
    )
    lockup_allowance: str = Field(
        default="5", alias="STORAGE_LOCKUP_ALLOWANCE", description="Total lockup allowance, in whole tokens"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="TENDERCHAIN_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Server port number",
        alias="TENDERCHAIN_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="TENDERCHAIN_LOG_LEVEL",
    )

    # =====================================================================
    # Chain Configuration
    # =====================================================================
    chain_rpc_url: str = Field(default="https://ethereum-sepolia-rpc.publicnode.com", alias="CHAIN_RPC_URL")
    chain_id: int = Field(default=11155111, alias="CHAIN_ID")
    tender_contract_address: str = Field(
        default="0x0000000000000000000000000000000000000000", alias="TENDER_CONTRACT_ADDRESS"
    )
    bid_contract_address: str = Field(
        default="0x0000000000000000000000000000000000000000", alias="BID_CONTRACT_ADDRESS"
    )

    # =====================================================================
    # Tender Catalog Configuration
    # =====================================================================
    tender_cache_ttl_seconds: float = Field(default=300.0, alias="TENDER_CACHE_TTL_SECONDS")
    tender_fetch_batch_size: int = Field(default=10, ge=1, alias="TENDER_FETCH_BATCH_SIZE")
    tender_count_timeout_seconds: float = Field(default=10.0, alias="TENDER_COUNT_TIMEOUT_SECONDS")
    tender_fetch_timeout_seconds: float = Field(default=30.0, alias="TENDER_FETCH_TIMEOUT_SECONDS")

    # =====================================================================
    # Storage Configuration
    # =====================================================================
    storage_gateway_url: str = Field(default="http://storage-gateway:8080", alias="STORAGE_GATEWAY_URL")
    storage_api_token: Optional[str] = Field(default=None, alias="STORAGE_API_TOKEN")
    storage_timeout_seconds: float = Field(default=120.0, alias="STORAGE_TIMEOUT_SECONDS")
    storage_service_address: Optional[str] = Field(default=None, alias="STORAGE_SERVICE_ADDRESS")
    storage_payment_token: str = Field(default="USDFC", alias="STORAGE_PAYMENT_TOKEN")
    storage_deposit_amount: str = Field(default="5", alias="STORAGE_DEPOSIT_AMOUNT")
    storage_rate_allowance: str = Field(default="1", alias="STORAGE_RATE_ALLOWANCE")
    storage_lockup_allowance: str = Field(default="5", alias="STORAGE_LOCKUP_ALLOWANCE")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def chain(self) -> ChainConfig:
        """Get chain configuration from environment variables."""
        return ChainConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def catalog(self) -> TenderCatalogConfig:
        """Get tender catalog configuration from environment variables."""
        return TenderCatalogConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def storage(self) -> StorageConfig:
        """Get storage gateway configuration from environment variables."""
        return StorageConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
