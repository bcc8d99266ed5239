from .resilient import ResilientHttpClient

__all__ = ["ResilientHttpClient"]
