# Argweave Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Argweave."""
import logging

logger: logging.Logger = logging.getLogger("argweave")
