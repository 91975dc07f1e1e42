from .app import create_app, main
from .settings import RelaySettings

__all__ = ["RelaySettings", "create_app", "main"]
