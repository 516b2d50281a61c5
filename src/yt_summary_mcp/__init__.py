"""YouTube transcript extraction and LLM summaries over MCP."""
