"""
UI Module

Provides the text screen that fetches and renders posts.
"""

from .screen import PostsScreen, render

__all__ = ["PostsScreen", "render"]
