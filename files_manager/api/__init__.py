from .dispatch import mount
from .routes import build

__all__ = ["build", "mount"]
