# src/costgraph/core/config.py

import logging
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

_TRUTHY = ("true", "1", "t", "y", "yes")


def _env_bool(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() in _TRUTHY


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Dgraph variables ---
        self.DGRAPH_ACCESS_TOKEN = self._get_secret("DGRAPH_ACCESS_TOKEN")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Docker secret/volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"/etc/costgraph/secrets/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    # --- Dgraph variables ---
    # Resolved at access time so tests (and long-running callers) see env changes.
    @property
    def DGRAPH_URL(self) -> str:
        return os.getenv("DGRAPH_URL", "http://localhost:8080").rstrip("/")

    DGRAPH_VERIFY_CERTS = _env_bool("DGRAPH_VERIFY_CERTS", "True")
    # Read-only, best-effort queries accept a slightly stale snapshot.
    DGRAPH_BEST_EFFORT = _env_bool("DGRAPH_BEST_EFFORT", "True")

    # --- HTTP client variables ---
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "30"))
    USER_AGENT = os.getenv("USER_AGENT", "costgraph")

    # --- Pricing variables ---
    # Unit prices used whenever a pod carries no stored price metadata.
    DEFAULT_CPU_PRICE = float(os.getenv("DEFAULT_CPU_PRICE", "0.024"))  # $ per vCPU-hour
    DEFAULT_MEMORY_PRICE = float(os.getenv("DEFAULT_MEMORY_PRICE", "0.01"))  # $ per GB-hour
    DEFAULT_STORAGE_PRICE = float(os.getenv("DEFAULT_STORAGE_PRICE", "0.00013888888"))  # $ per GB-hour
    COST_PERIOD_HOURS = float(os.getenv("COST_PERIOD_HOURS", "720"))

    # --- Kubernetes variables ---
    KUBECONFIG = os.getenv("KUBECONFIG")
    KUBE_CONTEXT = os.getenv("KUBE_CONTEXT")

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    def validate_instance(self):
        for key in ("DEFAULT_CPU_PRICE", "DEFAULT_MEMORY_PRICE", "DEFAULT_STORAGE_PRICE"):
            if getattr(self, key) < 0:
                raise ValueError(f"{key} must not be negative.")
        if self.COST_PERIOD_HOURS <= 0:
            raise ValueError("COST_PERIOD_HOURS must be greater than zero.")
        if urlparse(self.DGRAPH_URL).scheme not in ("http", "https"):
            raise ValueError("DGRAPH_URL must be an http(s) URL.")
        if not self.DGRAPH_ACCESS_TOKEN:
            logging.getLogger(__name__).debug("DGRAPH_ACCESS_TOKEN is not set; sending unauthenticated queries.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
