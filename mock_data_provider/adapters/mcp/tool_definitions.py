"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by both the HTTP/SSE server and the CLI.
"""

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "get_news": {
        "name": "get_news",
        "description": """Synthetic news articles published in [start, end). Missing spans are generated and stored, so repeat calls return the same articles.

get_news("2024-01-01T00:00:00Z", "2024-01-01T06:00:00Z") → {count: 11, articles: [...]}
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "start": {
                    "type": "string",
                    "description": "Window start, ISO-8601 (inclusive)"
                },
                "end": {
                    "type": "string",
                    "description": "Window end, ISO-8601 (exclusive, must be after start)"
                }
            },
            "required": ["start", "end"]
        }
    },
    "get_hedgefund_filings": {
        "name": "get_hedgefund_filings",
        "description": """Synthetic quarterly hedge-fund filings filed in [start, end], with top holdings and new/decreased/sold-out positions vs. the prior quarter.

get_hedgefund_filings("2023-01-01", "2023-12-31") → every fund's 2022Q4..2023Q3 filings
get_hedgefund_filings("2023-01-01", "2023-12-31", fund="Citadel Advisors LLC") → one fund
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "start": {
                    "type": "string",
                    "description": "Window start, ISO-8601 (inclusive)"
                },
                "end": {
                    "type": "string",
                    "description": "Window end, ISO-8601 (inclusive, must be after start)"
                },
                "fund": {
                    "type": "string",
                    "description": "Exact fund name to filter on. Omit for all funds."
                }
            },
            "required": ["start", "end"]
        }
    }
}
