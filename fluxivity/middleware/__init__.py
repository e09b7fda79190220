"""
Fluxivity Middleware
====================

The four-hook middleware contract and the middleware shipped with fluxivity.
"""

from .base import Middleware
from .logger import LoggingMiddleware
from .validation import ValidationMiddleware

__all__ = [
    "Middleware",
    "LoggingMiddleware",
    "ValidationMiddleware",
]
