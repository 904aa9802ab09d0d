"""
MCP Tool Handlers

Shared handlers for MCP tools that use the hexagonal core.
"""
import asyncio
from typing import Any, Optional

from ...container import Container


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def get_news(self, start: str, end: str) -> dict[str, Any]:
        """Articles in [start, end), generating and storing any missing span"""
        try:
            result = await asyncio.to_thread(
                self.container.news.execute,
                start=start,
                end=end
            )

            return {
                "success": True,
                "generated": result.generated,
                **result.to_dict("articles")
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to get news: {str(e)}"
            }

    async def get_hedgefund_filings(
        self,
        start: str,
        end: str,
        fund: Optional[str] = None
    ) -> dict[str, Any]:
        """Filings in [start, end], generating and storing missing fund-quarters"""
        try:
            result = await asyncio.to_thread(
                self.container.hedgefunds.execute,
                start=start,
                end=end,
                fund=fund
            )

            return {
                "success": True,
                "generated": result.generated,
                **result.to_dict("records")
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to get hedge fund filings: {str(e)}"
            }
