from .site_tree import SiteTree

__all__ = ["SiteTree"]
