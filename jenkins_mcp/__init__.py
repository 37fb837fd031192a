"""Jenkins MCP server package.

Layout:
- mcp.py: FastMCP tool definitions + stdio runner
- handlers.py: one handler per tool, returning Markdown text
- utils/: Jenkins HTTP client, URL building, error classification, formatting
- mcp_log/: tool-call log (SQLAlchemy)
"""

__version__ = "0.1.0"
