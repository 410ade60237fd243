"""
Dub.co entities and per-tool parameter types.

Domain and Link mirror the JSON returned by the Dub.co API (camelCase on the
wire, snake_case here). The *Params classes parse the loosely-typed
``arguments`` mapping of an MCP ``tools/call`` request into a strict shape,
raising an invalid-params McpError for the first missing or malformed field.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData


def invalid_params(message: str) -> McpError:
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def _as_mapping(arguments: Any) -> Mapping[str, Any]:
    if arguments is None:
        return {}
    if not isinstance(arguments, Mapping):
        raise invalid_params("Tool arguments must be an object")
    return arguments


def _optional_str(arguments: Mapping[str, Any], field: str) -> Optional[str]:
    """Return a string argument, treating absent/None/"" as not supplied."""
    value = arguments.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise invalid_params(f"{field} must be a string")
    return value or None


def _required_str(arguments: Mapping[str, Any], field: str, missing_message: str) -> str:
    value = _optional_str(arguments, field)
    if value is None:
        raise invalid_params(missing_message)
    return value


def _link_id(arguments: Mapping[str, Any]) -> str:
    link_id = _required_str(arguments, "linkId", "Link ID is required")
    # Percent-encoding leaves dot segments alone.
    if link_id in (".", ".."):
        raise invalid_params(f"Invalid link ID: {link_id}")
    return link_id


# =============================================================================
# REMOTE ENTITIES
# =============================================================================

@dataclass
class Domain:
    """A domain registered in the Dub.co workspace."""
    id: str
    slug: str
    verified: bool = False
    primary: bool = False
    archived: bool = False
    placeholder: Optional[str] = None
    expired_url: Optional[str] = None
    not_found_url: Optional[str] = None
    logo: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Domain":
        return cls(
            id=data.get("id", ""),
            slug=data.get("slug", ""),
            verified=bool(data.get("verified", False)),
            primary=bool(data.get("primary", False)),
            archived=bool(data.get("archived", False)),
            placeholder=data.get("placeholder"),
            expired_url=data.get("expiredUrl"),
            not_found_url=data.get("notFoundUrl"),
            logo=data.get("logo"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def describe(self) -> str:
        """One-line summary used by list_domains."""
        markers = []
        if self.primary:
            markers.append("primary")
        if not self.verified:
            markers.append("unverified")
        if self.archived:
            markers.append("archived")
        if markers:
            return f"{self.slug} ({', '.join(markers)})"
        return self.slug


@dataclass
class Link:
    """A short link as returned by the links endpoints."""
    id: str
    domain: str
    key: str
    url: str
    short_link: str
    external_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Link":
        return cls(
            id=data.get("id", ""),
            domain=data.get("domain", ""),
            key=data.get("key", ""),
            url=data.get("url", ""),
            short_link=data.get("shortLink", ""),
            external_id=data.get("externalId"),
        )

    def summary(self) -> str:
        return f"{self.short_link}\n\nDestination: {self.url}\nID: {self.id}"


# =============================================================================
# TOOL PARAMETERS
# =============================================================================

@dataclass
class LinkParams:
    """Arguments of create_link and upsert_link."""
    url: str
    key: Optional[str] = None
    external_id: Optional[str] = None
    domain: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> "LinkParams":
        args = _as_mapping(arguments)
        return cls(
            url=_required_str(args, "url", "URL is required"),
            key=_optional_str(args, "key"),
            external_id=_optional_str(args, "externalId"),
            domain=_optional_str(args, "domain"),
        )

    def to_payload(self, domain_slug: str) -> Dict[str, str]:
        """Request body for POST /links and PUT /links/upsert."""
        payload = {"url": self.url, "domain": domain_slug}
        if self.key:
            payload["key"] = self.key
        if self.external_id:
            payload["externalId"] = self.external_id
        return payload


@dataclass
class UpdateLinkParams:
    """Arguments of update_link. At least one field besides link_id is set."""
    link_id: str
    url: Optional[str] = None
    domain: Optional[str] = None
    key: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Any) -> "UpdateLinkParams":
        args = _as_mapping(arguments)
        params = cls(
            link_id=_link_id(args),
            url=_optional_str(args, "url"),
            domain=_optional_str(args, "domain"),
            key=_optional_str(args, "key"),
        )
        if not params.to_payload():
            raise invalid_params("At least one parameter to update is required")
        return params

    def to_payload(self) -> Dict[str, str]:
        """Only the supplied fields; the API leaves the rest untouched."""
        payload = {}
        if self.url:
            payload["url"] = self.url
        if self.domain:
            payload["domain"] = self.domain
        if self.key:
            payload["key"] = self.key
        return payload


@dataclass
class DeleteLinkParams:
    link_id: str

    @classmethod
    def from_arguments(cls, arguments: Any) -> "DeleteLinkParams":
        args = _as_mapping(arguments)
        return cls(link_id=_link_id(args))


@dataclass
class ListDomainsParams:
    @classmethod
    def from_arguments(cls, arguments: Any) -> "ListDomainsParams":
        _as_mapping(arguments)
        return cls()
