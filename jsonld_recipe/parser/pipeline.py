"""Orchestrator: validate the URL, fetch the page, extract its recipe."""

import ipaddress
import logging
import socket
from urllib.parse import urlparse

import httpx

from jsonld_recipe.config import Settings, get_settings
from jsonld_recipe.models import FetchError, RecipeRecord
from jsonld_recipe.parser.structured import extract_recipe

logger = logging.getLogger(__name__)


_BLOCKED_NETWORKS = [
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]


def validate_url(url: str) -> None:
    """Validate URL scheme and block requests to private/reserved IPs."""
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        logger.warning("Rejected URL with scheme %r: %s", parsed.scheme, url)
        raise FetchError(
            "Only http and https URLs are supported.", error_type="validation"
        )

    hostname = parsed.hostname
    if not hostname:
        logger.warning("Rejected URL with no hostname: %s", url)
        raise FetchError("Invalid URL.", error_type="validation")

    try:
        addrinfos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        logger.warning("DNS resolution failed for %s", hostname)
        raise FetchError(
            "Unable to resolve the host of the provided url.", error_type="network"
        )

    for _, _, _, _, sockaddr in addrinfos:
        ip = ipaddress.ip_address(sockaddr[0])
        if any(ip in network for network in _BLOCKED_NETWORKS):
            logger.warning("Blocked private IP %s for hostname %s", ip, hostname)
            raise FetchError(
                "Requests to private or internal addresses are not allowed.",
                error_type="validation",
            )


async def fetch_html(url: str, settings: Settings) -> str:
    """GET the page body, mapping transport failures to FetchError."""
    try:
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException:
        logger.warning("Timeout fetching %s", url)
        raise FetchError(
            "Request timed out fetching the provided url.", error_type="network"
        )
    except httpx.ConnectError:
        logger.warning("Connection error fetching %s", url)
        raise FetchError("Unable to connect to the provided url.", error_type="network")
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("HTTP %d from %s", status, url)
        raise FetchError(
            f"Unable to fetch from provided url (HTTP {status}).", error_type="http"
        )
    except httpx.RequestError as e:
        logger.warning("Request error fetching %s: %s", url, e)
        raise FetchError("Unable to fetch from provided url.", error_type="network")

    body = response.text
    logger.info("Fetched %s (HTTP %d, %d bytes)", url, response.status_code, len(body))
    if not body:
        raise FetchError("No body returned from fetch.", error_type="http")
    return body


async def parse_recipe(url: str, settings: Settings | None = None) -> RecipeRecord:
    """Fetch a URL and extract the first JSON-LD Recipe from it."""
    settings = settings or get_settings()

    logger.info("Parsing recipe from %s", url)
    validate_url(url)
    html = await fetch_html(url, settings)

    recipe = extract_recipe(
        html, strict=settings.strict_jsonld, expand_graph=settings.expand_graph
    )
    logger.info("Extracted recipe %r from %s", recipe.name, url)
    return recipe
