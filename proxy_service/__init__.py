"""
Proxy Gateway
Same-origin forwarding of browser API calls to the inventory backend
"""

__version__ = "1.0.0"
