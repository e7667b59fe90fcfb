from .content_service import ContentStore, SQLContentStore
from .preference_service import CookiePreferenceStore, PreferenceStore

__all__ = ["ContentStore", "CookiePreferenceStore", "PreferenceStore", "SQLContentStore"]
