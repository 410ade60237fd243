"""
DUBCO_MCP - Dub.co short links as MCP tools

Components:
- config.py: Settings loaded from the environment / .env
- models.py: Domain and Link entities, per-tool parameter parsing
- client.py: httpx client for the Dub.co REST API, error shaping
- tools.py: LinkToolAdapter (tool catalog, handlers, domain resolution)
- mcp_server.py: stdio MCP server and CLI entry point

Tools:
    create_link   POST /links          (domain lookup first)
    update_link   PATCH /links/{id}
    upsert_link   PUT /links/upsert    (domain lookup first)
    delete_link   DELETE /links/{id}
    list_domains  GET /domains
"""

from .config import ConfigurationError, Settings
from .models import (
    Domain,
    Link,
    LinkParams,
    UpdateLinkParams,
    DeleteLinkParams,
    ListDomainsParams,
)
from .client import DubcoClient, describe_http_error, format_failure
from .tools import LinkToolAdapter, TOOLS

__all__ = [
    "ConfigurationError",
    "Settings",
    "Domain",
    "Link",
    "LinkParams",
    "UpdateLinkParams",
    "DeleteLinkParams",
    "ListDomainsParams",
    "DubcoClient",
    "describe_http_error",
    "format_failure",
    "LinkToolAdapter",
    "TOOLS",
]
