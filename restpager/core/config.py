"""
Configuration settings for REST API access.

This module defines configuration settings for rate limiting, pagination,
the HTTP transport and logging. It provides a central location for all
configuration values used throughout the package.
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv


# Pick up RESTPAGER_* settings from a local .env file if present
load_dotenv()

# Rate limiting configuration - ~5 requests per minute on the remote service
RATE_LIMIT = {
    # Maximum requests recorded before the limiter blocks
    "MAX_CALLS": 5,
    # Length of the rate limit window in seconds
    "WINDOW_SIZE": 60,
    # "window" sleeps for what is left of the window, "fixed" always sleeps WINDOW_SIZE
    "POLICY": "window",
    # Extra seconds added to a window delay
    "GRACE_PERIOD": 1,
}

# Pagination configuration
PAGINATION = {
    # Default page size for list requests
    "PAGE_SIZE": 50,
    # Force a pause every N completed pages in a lazy traversal (0 disables)
    "PAUSE_EVERY_PAGES": 0,
    # Length of that pause in seconds
    "PAUSE_SECONDS": 60,
    # Link relations tracked between pages
    "RELATIONS": ("first", "prev", "next", "last"),
}

# HTTP transport configuration
API = {
    # Base URL relative request paths are joined to
    "BASE_URL": "https://gitlab.com/api/v4/",
    # Access token sent with every request (None for anonymous access)
    "TOKEN": None,
    # Request timeout in seconds
    "TIMEOUT": 30,
    "USER_AGENT": "restpager",
}

# Paths configuration
PATHS = {
    # Directory that relative log file names are placed in
    "LOG_DIR": os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs"),
    # Default log file (None logs to console only)
    "DEFAULT_LOG_FILE": None,
}


def load_env_config() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Returns:
        Dictionary mapping "SECTION.KEY" to values read from the environment
    """
    config = {}

    # Rate limit settings
    if "RESTPAGER_MAX_CALLS" in os.environ:
        config["RATE_LIMIT.MAX_CALLS"] = int(os.environ["RESTPAGER_MAX_CALLS"])
    if "RESTPAGER_WINDOW_SIZE" in os.environ:
        config["RATE_LIMIT.WINDOW_SIZE"] = float(os.environ["RESTPAGER_WINDOW_SIZE"])
    if "RESTPAGER_RATE_LIMIT_POLICY" in os.environ:
        config["RATE_LIMIT.POLICY"] = os.environ["RESTPAGER_RATE_LIMIT_POLICY"].lower()

    # Pagination settings
    if "RESTPAGER_PAGE_SIZE" in os.environ:
        config["PAGINATION.PAGE_SIZE"] = int(os.environ["RESTPAGER_PAGE_SIZE"])

    # API settings
    if "RESTPAGER_API_TIMEOUT" in os.environ:
        config["API.TIMEOUT"] = float(os.environ["RESTPAGER_API_TIMEOUT"])
    if "RESTPAGER_BASE_URL" in os.environ:
        config["API.BASE_URL"] = os.environ["RESTPAGER_BASE_URL"]
    if "RESTPAGER_API_TOKEN" in os.environ:
        config["API.TOKEN"] = os.environ["RESTPAGER_API_TOKEN"]

    # Logging
    if "RESTPAGER_LOG_FILE" in os.environ:
        config["PATHS.DEFAULT_LOG_FILE"] = os.environ["RESTPAGER_LOG_FILE"]
    if "RESTPAGER_LOG_DIR" in os.environ:
        config["PATHS.LOG_DIR"] = os.environ["RESTPAGER_LOG_DIR"]

    return config


def apply_env_config(env_config: Dict[str, Any]) -> None:
    """
    Apply environment variable configuration.

    Args:
        env_config: Dictionary containing configuration values from environment variables
    """
    for key, value in env_config.items():
        parts = key.split(".")
        if len(parts) == 2:
            module_name, setting_name = parts
            if module_name in globals() and setting_name in globals()[module_name]:
                globals()[module_name][setting_name] = value


# Apply environment variable configuration
ENV_CONFIG = load_env_config()
apply_env_config(ENV_CONFIG)
