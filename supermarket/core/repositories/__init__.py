from .repository import EntityT, Repository

__all__ = ["EntityT", "Repository"]
