"""Promotional furniture catalog service.

This package holds the catalog API: category resolution, paginated product
queries, the product store and the FastAPI surface that exposes them.
"""

__version__ = "0.1.0"
