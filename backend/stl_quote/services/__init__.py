# services/__init__.py

from .quote_service import QuoteService

__all__ = ["QuoteService"]
