"""
Base tool class

Shared run/fallback behaviour for every outbound medication lookup
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
import structlog

logger = structlog.get_logger()


class BaseTool(ABC):
    """
    Tool base class

    Subclasses implement:
    1. _execute: the lookup itself, free to raise
    2. _fallback: the well-formed failure result returned instead

    run() is the only entry point callers use. It never raises for
    ordinary exceptions; there is no retry, each call is one attempt.
    """

    def __init__(self):
        self.name = self.__class__.__name__
        self.call_count = 0
        self.error_count = 0

    @abstractmethod
    async def _execute(self, **kwargs) -> Dict[str, Any]:
        """
        Core logic

        Returns a dict that always carries 'success': bool
        """
        pass

    @abstractmethod
    def _fallback(self, error: Exception, **kwargs) -> Dict[str, Any]:
        """
        Failure result used when _execute raised
        """
        pass

    async def run(self, **kwargs) -> Dict[str, Any]:
        self.call_count += 1

        try:
            logger.info(
                "tool.execute",
                tool=self.name,
                params=kwargs
            )

            result = await self._execute(**kwargs)

            logger.info(
                "tool.success",
                tool=self.name,
                success=result.get('success')
            )

            return result

        except Exception as e:
            self.error_count += 1

            logger.error(
                "tool.error",
                tool=self.name,
                error=str(e),
                error_type=type(e).__name__,
                fallback=True
            )

            return self._fallback(error=e, **kwargs)
