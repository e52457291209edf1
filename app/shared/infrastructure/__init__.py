"""
Infrastructure layer package for GreenMate.
Provides object storage backends and the external API client.
"""

__all__ = [
    "external_apis",
    "storage",
]
