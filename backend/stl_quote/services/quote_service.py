# services/quote_service.py

import logging
from typing import Any, Optional, Union

from ..core.common_types import ErrorInfo, ParseMode, RequesterCategory, ServiceResult
from ..core.exceptions import StlQuoteError
from ..processes.print_3d import Print3DProcessor, calculate_price

logger = logging.getLogger(__name__)

class QuoteService:
    """
    Entry point for collaborators (HTTP handlers, CLI).

    Both operations return a ServiceResult instead of raising for known
    failures, so callers only have to map `error.kind` to their own status
    codes. Unexpected exceptions still propagate.
    """

    def __init__(self, processor: Optional[Print3DProcessor] = None):
        self.processor = processor or Print3DProcessor()
        logger.info(f"QuoteService initialized (parse mode: {self.processor.parse_mode.value}).")

    def analyze(self, buffer: bytes, parse_mode: Optional[ParseMode] = None) -> ServiceResult:
        """
        Analyzes an STL upload.

        Args:
            buffer: Raw STL bytes (base64 already decoded).
            parse_mode: Optional ASCII strictness override.

        Returns:
            ServiceResult with `analysis` set on success, `error` otherwise.
        """
        try:
            report = self.processor.analyze(buffer, parse_mode=parse_mode)
            return ServiceResult(success=True, analysis=report)
        except StlQuoteError as e:
            logger.error(f"STL analysis failed due to {type(e).__name__}: {e}", exc_info=True)
            return self._failure(e)
        except Exception:
            logger.exception("An unexpected error occurred during STL analysis.")
            raise

    def price(self, grams: Any, category: Optional[Union[str, RequesterCategory]] = None) -> ServiceResult:
        """
        Prices a print.

        Args:
            grams: Material mass in grams.
            category: 'student', 'faculty' or 'guest'; absent means guest.

        Returns:
            ServiceResult with `quote` set on success, `error` otherwise.
        """
        try:
            quote = calculate_price(grams, category)
            return ServiceResult(success=True, quote=quote)
        except StlQuoteError as e:
            logger.error(f"Price calculation failed due to {type(e).__name__}: {e}")
            return self._failure(e)
        except Exception:
            logger.exception("An unexpected error occurred during price calculation.")
            raise

    @staticmethod
    def _failure(error: StlQuoteError) -> ServiceResult:
        return ServiceResult(success=False, error=ErrorInfo(kind=error.kind, message=str(error)))
