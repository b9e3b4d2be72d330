"""Authentication strategies for the Graph API."""
from .base import AuthStrategy
from .access_token import ACCESS_TOKEN_PARAM, AccessTokenAuth

__all__ = ["ACCESS_TOKEN_PARAM", "AuthStrategy", "AccessTokenAuth"]
