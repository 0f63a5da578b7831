from .routes_insurance import router

__all__ = ['router']
