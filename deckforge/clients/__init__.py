"""
Service clients for Deckforge.
"""

from .image_search_client import ImageSearchClient

__all__ = ['ImageSearchClient']
