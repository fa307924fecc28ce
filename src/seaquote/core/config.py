"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ParserConfig(BaseSettings):
    """Spreadsheet requisition parser configuration."""

    model_config = {"env_prefix": "SEAQUOTE_PARSER_"}

    mode: Literal["lenient", "strict"] = "lenient"
    metadata_scan_rows: int = 5
    unknown_vessel: str = "Unknown Vessel"
    unknown_port: str = "Unknown Port"
    default_currency: str = "USD"
    # Tried in order after ISO 8601. Numeric dates are day-first.
    date_formats: list[str] = Field(
        default_factory=lambda: [
            "%Y/%m/%d",
            "%d/%m/%Y",
            "%d.%m.%Y",
            "%d-%m-%Y",
            "%d/%m/%y",
            "%d.%m.%y",
            "%d %b %Y",
            "%d-%b-%Y",
            "%d-%b-%y",
            "%d %B %Y",
            "%b %d, %Y",
            "%B %d, %Y",
        ]
    )
    cache_ttl_seconds: int = 3600


class LLMConfig(BaseSettings):
    """Text-generation provider configuration."""

    model_config = {"env_prefix": "SEAQUOTE_LLM_"}

    provider: Literal["mock", "bedrock"] = "mock"
    bedrock_model: str = "anthropic.claude-3-5-haiku-20241022-v1:0"
    region: str = "us-east-1"
    endpoint_url: str | None = None
    temperature: float = 0.7
    max_tokens: int = 2000
    max_retries: int = 3
    retry_backoff_seconds: float = 1.0


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "SEAQUOTE_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "SEAQUOTE_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "seaquote:"


class S3Config(BaseSettings):
    """S3 storage for uploaded requisition spreadsheets."""

    model_config = {"env_prefix": "SEAQUOTE_S3_"}

    bucket: str = "seaquote-requisition-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    upload_prefix: str = "uploads"


class CompanyConfig(BaseSettings):
    """Buyer contact details quoted in outbound RFQs."""

    model_config = {"env_prefix": "SEAQUOTE_COMPANY_"}

    name: str = "Your Company"
    email: str = "purchasing@company.com"
    phone: str = "+1234567890"


class EmailConfig(BaseSettings):
    """Outbound RFQ delivery."""

    model_config = {"env_prefix": "SEAQUOTE_EMAIL_"}

    provider: Literal["mock", "ses"] = "mock"
    sender: str | None = None  # defaults to the company email
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SEAQUOTE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    persistence_backend: Literal["aws", "memory"] = "aws"

    parser: ParserConfig = ParserConfig()
    llm: LLMConfig = LLMConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
    company: CompanyConfig = CompanyConfig()
    email: EmailConfig = EmailConfig()
