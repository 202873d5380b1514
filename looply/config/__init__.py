from looply.config.settings import settings

__all__ = ["settings"]
