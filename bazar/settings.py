import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class Settings(BaseModel):
    # Catalog service replicas, tried in this order on failover
    catalog_replicas: list[str] = Field(
        default=["http://catalog-service-1:3001", "http://catalog-service-2:3002"],
        alias="CATALOG_REPLICAS",
    )

    # Order service replicas, used round-robin
    order_replicas: list[str] = Field(
        default=["http://order-service-1:3003", "http://order-service-2:3004"],
        alias="ORDER_REPLICAS",
    )

    # HTTP Configuration
    request_timeout: float = Field(default=5.0, alias="REQUEST_TIMEOUT")

    # Logging Configuration
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    @field_validator("catalog_replicas", "order_replicas", mode="before")
    @classmethod
    def _split_replicas(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        replicas = [v.strip().rstrip("/") for v in value if v and v.strip()]
        if not replicas:
            raise ValueError("at least one replica address is required")
        return replicas


def load_settings() -> Settings:
    """Build settings from the process environment (after .env is loaded)."""
    return Settings.model_validate(
        {
            name: os.environ[name]
            for name in (
                "CATALOG_REPLICAS",
                "ORDER_REPLICAS",
                "REQUEST_TIMEOUT",
                "LOG_LEVEL",
            )
            if name in os.environ
        }
    )


global_settings = load_settings()
