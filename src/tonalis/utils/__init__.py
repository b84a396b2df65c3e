from .cls import noInstance

__all__ = ["noInstance"]
