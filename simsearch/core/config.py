"""
Configuration for the similarity search core.
Values come from the environment (optionally seeded from a .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Logging
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Similarity engine
SIMILARITY_PARALLEL = os.getenv("SIMILARITY_PARALLEL", "false").lower() == "true"
SIMILARITY_MAX_WORKERS = int(os.getenv("SIMILARITY_MAX_WORKERS", "3"))
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "5"))

# Collection registry
DUPLICATE_COLLECTION_POLICY = os.getenv("DUPLICATE_COLLECTION_POLICY", "replace")  # replace|reject

VALID_DUPLICATE_POLICIES = ("replace", "reject")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

VERSION = "0.1.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def get_log_level():
    """Get the configured log level name."""
    return os.getenv("LOG_LEVEL", LOG_LEVEL).upper()


def is_parallel_similarity_enabled():
    """Check if cosine reductions should fan out to the reduction pool."""
    return os.getenv("SIMILARITY_PARALLEL", "false").lower() == "true"


def get_max_workers():
    """Get the size of the shared reduction pool."""
    return int(os.getenv("SIMILARITY_MAX_WORKERS", str(SIMILARITY_MAX_WORKERS)))


def get_default_top_k():
    """Get the k used when a caller does not pass one."""
    return int(os.getenv("DEFAULT_TOP_K", str(DEFAULT_TOP_K)))


def get_duplicate_collection_policy():
    """Get duplicate collection policy (replace|reject)."""
    return os.getenv("DUPLICATE_COLLECTION_POLICY", DUPLICATE_COLLECTION_POLICY).lower()


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if get_duplicate_collection_policy() not in VALID_DUPLICATE_POLICIES:
        issues.append(f"Invalid DUPLICATE_COLLECTION_POLICY: {get_duplicate_collection_policy()}")

    if get_log_level() not in VALID_LOG_LEVELS:
        issues.append(f"Invalid LOG_LEVEL: {get_log_level()}")

    try:
        if get_max_workers() < 1:
            issues.append("SIMILARITY_MAX_WORKERS must be >= 1")
    except ValueError:
        issues.append("SIMILARITY_MAX_WORKERS must be an integer")

    try:
        if get_default_top_k() < 0:
            issues.append("DEFAULT_TOP_K must be >= 0")
    except ValueError:
        issues.append("DEFAULT_TOP_K must be an integer")

    return issues
