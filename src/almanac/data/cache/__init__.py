from .render_cache import CacheKey, RenderCache, notes_signature

__all__ = ["CacheKey", "RenderCache", "notes_signature"]
