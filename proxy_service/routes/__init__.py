"""
API routes for the proxy gateway
"""

from . import auth, diagnostics, health, images, proxy, resources

__all__ = ["auth", "diagnostics", "health", "images", "proxy", "resources"]
