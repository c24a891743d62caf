"""Shared middleware for cross-cutting HTTP concerns.

CORS handling and error-body rendering used by every router of the
provisioning API.
"""

from shared_kernel.middleware.cors import CORS_HEADERS, PermissiveCORSMiddleware
from shared_kernel.middleware.errors import install_error_handlers

__all__ = [
    "CORS_HEADERS",
    "PermissiveCORSMiddleware",
    "install_error_handlers",
]
