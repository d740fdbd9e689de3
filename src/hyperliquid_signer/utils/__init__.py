"""
Utils Package - Utility modules for the signer
Provides configuration management, logging setup and the caller-side
nonce source.

File: __init__.py
Modified: 2025-07-15
"""

from .config import Config
from .logger import configure_logging, setup_logger, mask_secret
from .nonce import NonceSource

__all__ = ['Config', 'configure_logging', 'setup_logger', 'mask_secret', 'NonceSource']
