"""
Application configuration settings loaded from config.yaml
"""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, field_validator


CONFIG_ENV_VAR = "AGENCY_CRM_CONFIG"


class DatabasePoolConfig(BaseModel):
    """Database connection pool configuration"""
    size: int = 10  # Number of connections to maintain
    max_overflow: int = 20  # Maximum overflow connections
    timeout: int = 30  # Seconds to wait for a connection
    recycle: int = 3600  # Seconds before recycling a connection
    echo: bool = False  # Log SQL queries


class DatabaseConfig(BaseModel):
    """Database configuration"""
    url: Optional[str] = None  # Full SQLAlchemy URL, overrides the postgres fields below
    server: str = "localhost"
    user: str = "postgres"
    password: str = ""
    db: str = "agency_crm"
    port: str = "5432"
    schema_name: str = "public"  # PostgreSQL schema (search_path)
    pool: DatabasePoolConfig = DatabasePoolConfig()

    @property
    def is_postgres(self) -> bool:
        return self.dsn.startswith("postgresql")

    @property
    def dsn(self) -> str:
        """Construct database URL"""
        if self.url:
            return self.url
        return f"postgresql://{self.user}:{self.password}@{self.server}:{self.port}/{self.db}"


class SyncConfig(BaseModel):
    """Lead/Client/Policy synchronization settings"""
    eager_conversion: bool = False  # Create a Client as soon as a Lead is created
    placeholder_email_domain: str = "placeholder.com"  # Used when a Lead has no email


class Settings(BaseModel):
    """Application settings loaded from config.yaml"""

    # Project settings
    project_name: str = "Agency CRM API"
    version: str = "1.0.0"
    description: str = "Insurance agency CRM with lead, client and policy synchronization"
    api_v1_str: str = "/api/v1"

    # Database settings
    database: DatabaseConfig = DatabaseConfig()

    @property
    def DATABASE_URL(self) -> str:
        """Construct database URL"""
        return self.database.dsn

    # Synchronization settings
    sync: SyncConfig = SyncConfig()

    # CORS settings
    backend_cors_origins: List[str] = []

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return []

    # Logging
    log_level: str = "INFO"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml file. If None, uses $AGENCY_CRM_CONFIG or
                    looks for config.yaml in:
                    1. Current directory
                    2. Project root (src/../config.yaml)

    Returns:
        Settings: Loaded and validated settings
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)

    if config_path is None:
        # Try current directory first
        current_dir = Path.cwd() / "config.yaml"
        if current_dir.exists():
            config_path = str(current_dir)
        else:
            # Try project root (assuming we're in src/agency_crm/core/)
            project_root = Path(__file__).parent.parent.parent.parent / "config.yaml"
            if project_root.exists():
                config_path = str(project_root)
            else:
                raise FileNotFoundError(
                    "config.yaml not found. Please create config.yaml in the project root."
                )

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, "r") as f:
        config_data = yaml.safe_load(f)

    if config_data is None:
        raise ValueError("Configuration file is empty or invalid")

    return Settings(**config_data)


# Load settings on module import
settings = load_config()
