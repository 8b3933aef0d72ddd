from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    
    # Application
    app_name: str = "QR Link Shortener"
    app_version: str = "1.0.0"
    
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    
    # Database (single shared connection)
    database_url: str = "sqlite:///./qrlink.db"
    lock_timeout: float = -1  # Seconds; negative waits forever
    
    # Short links
    base_url: str = "http://127.0.0.1:3000"
    redirect_status_code: int = 307  # Temporary redirect (307 or 302)
    
    # QR rendering
    qr_default_size: int = 300
    qr_max_size: int = 4096
    qr_border: int = 4  # Quiet zone in modules (PNG only)
    qr_encode_short_url: bool = False  # Encode {base_url}/{id} instead of the target URL
    
    # Cache settings
    cache_backend: str = "null"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)
    cache_max_entries: int = 10000  # In-memory backend only
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
