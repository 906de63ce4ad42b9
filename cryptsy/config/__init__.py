from .settings import Settings, create_client

__all__ = ['Settings', 'create_client']
