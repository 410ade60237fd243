"""
Dub.co link tools exposed over MCP.

LinkToolAdapter owns the HTTP client and turns a tool name plus argument
mapping into one CallToolResult, or raises McpError for protocol-level
failures. Two failure policies apply:

- create_link, upsert_link, list_domains: remote failures become an
  ``isError`` result with status and message text.
- update_link, delete_link: remote failures are raised as internal-error
  McpErrors.

Argument problems, unknown tools and an empty domain list are always
McpErrors.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    CallToolResult,
    ErrorData,
    TextContent,
    Tool,
)

from .client import DubcoClient, format_failure
from .config import API_BASE_URL
from .models import (
    DeleteLinkParams,
    Domain,
    LinkParams,
    ListDomainsParams,
    UpdateLinkParams,
)

logger = logging.getLogger("dubco-mcp.tools")

_LINK_PROPERTIES = {
    "url": {
        "type": "string",
        "description": "The destination URL to shorten",
    },
    "key": {
        "type": "string",
        "description": "Optional custom slug for the short link. If not provided, a random slug will be generated.",
    },
    "externalId": {
        "type": "string",
        "description": "Optional external ID for the link",
    },
    "domain": {
        "type": "string",
        "description": "Optional domain slug to use. If not provided, the primary domain will be used.",
    },
}

TOOLS = [
    Tool(
        name="create_link",
        description="Create a new short link on dub.co, asking the user which domain to use",
        inputSchema={
            "type": "object",
            "properties": dict(_LINK_PROPERTIES),
            "required": ["url"],
        },
    ),
    Tool(
        name="update_link",
        description="Update an existing short link on dub.co",
        inputSchema={
            "type": "object",
            "properties": {
                "linkId": {"type": "string", "description": "The ID of the link to update"},
                "url": {"type": "string", "description": "The new destination URL"},
                "domain": {"type": "string", "description": "The new domain for the short link"},
                "key": {"type": "string", "description": "The new slug for the short link"},
            },
            "required": ["linkId"],
        },
    ),
    Tool(
        name="upsert_link",
        description="Create or update a short link on dub.co, asking the user which domain to use if creating",
        inputSchema={
            "type": "object",
            "properties": dict(_LINK_PROPERTIES),
            "required": ["url"],
        },
    ),
    Tool(
        name="delete_link",
        description="Delete a short link on dub.co",
        inputSchema={
            "type": "object",
            "properties": {
                "linkId": {"type": "string", "description": "The ID of the link to delete"},
            },
            "required": ["linkId"],
        },
    ),
    Tool(
        name="list_domains",
        description="List the domains available in the dub.co workspace, marking the primary one",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


class LinkToolAdapter:
    """Translate MCP tool calls into Dub.co API requests."""

    def __init__(
        self,
        api_key: str,
        base_url: str = API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = DubcoClient(api_key, base_url=base_url, transport=transport)
        self._handlers: Dict[str, Tuple[Any, Callable[[Any], Awaitable[CallToolResult]]]] = {
            "create_link": (LinkParams, self.create_link),
            "update_link": (UpdateLinkParams, self.update_link),
            "upsert_link": (LinkParams, self.upsert_link),
            "delete_link": (DeleteLinkParams, self.delete_link),
            "list_domains": (ListDomainsParams, self.list_domains),
        }

    async def close(self):
        await self.client.close()

    def list_tools(self) -> List[Tool]:
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: Any) -> CallToolResult:
        """Validate arguments for ``name`` and run its handler."""
        if name not in self._handlers:
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        params_type, handler = self._handlers[name]
        params = params_type.from_arguments(arguments)
        try:
            return await handler(params)
        except McpError:
            raise
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=f"Unexpected error: {e}")) from e

    # =========================================================================
    # DOMAIN RESOLUTION
    # =========================================================================

    async def get_domains(self) -> List[Domain]:
        try:
            return await self.client.list_domains()
        except Exception as e:
            logger.error(f"Error fetching domains: {e}")
            raise

    async def get_primary_domain(self) -> Domain:
        """The domain flagged primary, else the first one returned."""
        domains = await self.get_domains()
        if not domains:
            raise McpError(ErrorData(code=INVALID_REQUEST, message="No domains available in your workspace"))
        for domain in domains:
            if domain.primary:
                return domain
        return domains[0]

    async def get_domain_by_slug(self, slug: str) -> Optional[Domain]:
        for domain in await self.get_domains():
            if domain.slug == slug:
                return domain
        return None

    # =========================================================================
    # TOOL HANDLERS
    # =========================================================================

    async def create_link(self, params: LinkParams) -> CallToolResult:
        return await self._write_link(params, self.client.create_link, "created", "creating link")

    async def upsert_link(self, params: LinkParams) -> CallToolResult:
        return await self._write_link(params, self.client.upsert_link, "upserted", "upserting link")

    async def _write_link(self, params: LinkParams, send, verb: str, action: str) -> CallToolResult:
        try:
            if params.domain:
                domain = await self.get_domain_by_slug(params.domain)
                if domain is None:
                    # Returns without writing, although the message promises a fallback.
                    return text_result(f'Domain "{params.domain}" not found. Using primary domain instead.')
            else:
                domain = await self.get_primary_domain()

            link = await send(params.to_payload(domain.slug))
        except McpError:
            raise
        except Exception as e:
            logger.error(f"Error {action}: {e}")
            return text_result(format_failure(action, e), is_error=True)

        logger.info(f"Short link {verb}: {link.short_link} ({link.id})")
        return text_result(f"Short link {verb}: {link.summary()}")

    async def update_link(self, params: UpdateLinkParams) -> CallToolResult:
        try:
            link = await self.client.update_link(params.link_id, params.to_payload())
        except httpx.HTTPError as e:
            logger.error(f"Error updating link {params.link_id}: {e}")
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=format_failure("updating link", e))) from e

        logger.info(f"Link updated: {link.short_link} ({link.id})")
        return text_result(f"Link updated: {link.summary()}")

    async def delete_link(self, params: DeleteLinkParams) -> CallToolResult:
        try:
            await self.client.delete_link(params.link_id)
        except httpx.HTTPError as e:
            logger.error(f"Error deleting link {params.link_id}: {e}")
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=format_failure("deleting link", e))) from e

        logger.info(f"Link deleted: {params.link_id}")
        return text_result(f"Link with ID {params.link_id} has been deleted.")

    async def list_domains(self, params: ListDomainsParams) -> CallToolResult:
        try:
            domains = await self.get_domains()
        except Exception as e:
            return text_result(format_failure("listing domains", e), is_error=True)

        if not domains:
            return text_result("No domains available in your workspace")
        lines = [f"- {domain.describe()}" for domain in domains]
        return text_result("Domains:\n" + "\n".join(lines))
