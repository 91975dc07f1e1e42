from .base import StaticTokenProvider, TokenProvider
from .oauth import RefreshTokenManager

__all__ = ["RefreshTokenManager", "StaticTokenProvider", "TokenProvider"]
