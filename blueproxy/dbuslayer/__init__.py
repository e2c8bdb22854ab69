"""
D-Bus Layer for blueproxy.
Provides the session and the proxies built on it.
"""

from .session import Session
from .adapter import Adapter

__all__ = [
    "Session",
    "Adapter",
]
