from .routes_auth import router

__all__ = ['router']
