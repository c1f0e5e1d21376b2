"""
Configuration Management
Environment-based configuration for the credential provider and application settings
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)


class SupabaseConfig(BaseSettings):
    """Hosted auth provider and profile store configuration"""

    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Profile store
    profile_table: str = "profile"

    class Config:
        env_prefix = ""
        case_sensitive = False

    @field_validator('supabase_url')
    @classmethod
    def validate_supabase_url(cls, v):
        if v and not v.startswith(('http://', 'https://')):
            raise ValueError('SUPABASE_URL must be an http(s) URL')
        return v.rstrip('/')

    @field_validator('profile_table')
    @classmethod
    def validate_profile_table(cls, v):
        if not v or not v.strip():
            raise ValueError('PROFILE_TABLE must not be empty')
        return v.strip()

    def is_configured(self) -> bool:
        """Check if provider credentials are present"""
        return bool(self.supabase_url and self.supabase_anon_key)

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Supabase URL: {self.supabase_url or '(not set)'}")
        logger.info(f"Anon key: {'Yes' if self.supabase_anon_key else 'No'}")
        logger.info(f"Profile table: {self.profile_table}")


class AppConfig(BaseSettings):
    """Application Configuration"""

    # Service info
    service_name: str = "stockroom"
    service_version: str = "1.0.0"
    debug: bool = False

    # API settings
    docs_url: str = "/docs"
    allowed_origins: str = "*"

    # Signup form behaviour
    username_check_debounce: float = 0.3

    class Config:
        env_prefix = "APP_"
        case_sensitive = False

    @field_validator('username_check_debounce')
    @classmethod
    def validate_debounce(cls, v):
        if v < 0:
            raise ValueError('Username check debounce must not be negative')
        return v

    def cors_origins(self) -> list:
        """Comma-separated origins as a list"""
        return [origin.strip() for origin in self.allowed_origins.split(',') if origin.strip()]


# Global configuration instances
_supabase_config: Optional[SupabaseConfig] = None
_app_config: Optional[AppConfig] = None


def get_supabase_config() -> SupabaseConfig:
    """Get provider configuration instance"""
    global _supabase_config
    if _supabase_config is None:
        _supabase_config = SupabaseConfig()
    return _supabase_config


def get_app_config() -> AppConfig:
    """Get application configuration instance"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def reset_configuration():
    """Drop cached configuration so the next getter re-reads the environment"""
    global _supabase_config, _app_config
    _supabase_config = None
    _app_config = None


def validate_configuration() -> bool:
    """
    Validate and log configuration settings

    Returns:
        bool: True when the provider credentials are present
    """
    try:
        supabase_config = get_supabase_config()
        app_config = get_app_config()

        supabase_config.log_config()
        logger.info(f"Service: {app_config.service_name} v{app_config.service_version}")

        if not supabase_config.is_configured():
            logger.warning("Supabase credentials not found in environment")
            return False

        logger.info("Configuration validation completed")
        return True

    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
