"""HTTP runner for MCP server (Smithery / remote deployment)."""
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from yt_summary_mcp.server import (
    app_lifespan,
    get_transcript,
    summarize_video,
    cache_stats,
    summarize_for_audience,
    help_resource,
    TOOL_ANNOTATIONS,
)

server = FastMCP(
    "YouTube Summary",
    instructions="Extract YouTube video transcripts and summarize them with an LLM",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=8401,
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

# Register tools with annotations
server.tool(annotations=TOOL_ANNOTATIONS)(get_transcript)
server.tool(annotations=TOOL_ANNOTATIONS)(summarize_video)
server.tool(annotations=TOOL_ANNOTATIONS)(cache_stats)

# Register prompts
server.prompt()(summarize_for_audience)

# Register resources
server.resource("youtube://help")(help_resource)

server.run(transport="streamable-http")
