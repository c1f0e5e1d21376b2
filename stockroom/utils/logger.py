"""
Logging utilities for Stockroom

Provides centralized logging configuration and the audit logger used by the
signup and login flows.
"""

import os
import copy
import logging
import logging.config
from typing import Optional, Dict, Any
import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'loggers': {
        'stockroom': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    }
}


def load_logging_config(config_path: Optional[str]) -> Optional[Dict[str, Any]]:
    """Read a YAML logging config, returning None when it cannot be used"""
    if not config_path or not os.path.exists(config_path):
        return None
    try:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning(f"Failed to load logging config from {config_path}: {e}")
        return None


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> Dict[str, Any]:
    """
    Setup logging configuration

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'detailed', 'json')

    Returns:
        dict: The configuration that was applied
    """
    config = load_logging_config(config_path) or copy.deepcopy(DEFAULT_LOGGING_CONFIG)

    # Apply environment-specific overrides
    environment = os.getenv('ENVIRONMENT', 'development')
    env_config = config.pop(environment, None) if isinstance(config.get(environment), dict) else None
    if env_config:
        if 'handlers' in env_config:
            config.setdefault('handlers', {}).update(env_config['handlers'])
        if 'loggers' in env_config:
            config.setdefault('loggers', {}).update(env_config['loggers'])

    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level

    if log_format and log_format in config.get('formatters', {}):
        for handler_config in config.get('handlers', {}).values():
            handler_config['formatter'] = log_format

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        # Fallback to basic configuration
        logging.basicConfig(
            level=getattr(logging, log_level or 'INFO', logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger(__name__).error(f"Failed to configure logging: {e}")

    logging.getLogger(__name__).info(f"Logging configured for environment: {environment}")
    return config


class AuditLogger:
    """Logger for account audit events"""

    def __init__(self, name: str = "stockroom.audit"):
        self.logger = logging.getLogger(name)

    def log_account_event(
        self,
        event: str,
        email: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: str = 'info'
    ):
        """Log an account lifecycle event"""
        log_method = getattr(self.logger, severity.lower(), self.logger.info)
        subject = user_id or email or 'unknown'
        log_method(
            f"Account event: {event} for {subject}",
            extra={
                'event': event,
                'email': email,
                'user_id': user_id,
                'details': details or {},
                'event_type': 'account_event'
            }
        )


def get_audit_logger() -> AuditLogger:
    """Get audit logger instance"""
    return AuditLogger()


def init_logging() -> Dict[str, Any]:
    """Initialize logging with environment variables"""
    config_path = os.getenv('LOGGING_CONFIG_PATH')
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    log_format = os.getenv('LOG_FORMAT', 'default')

    return setup_logging(config_path, log_level, log_format)
