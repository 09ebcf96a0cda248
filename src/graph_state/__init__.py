from .store import InteractionGraph

__all__ = ["InteractionGraph"]
