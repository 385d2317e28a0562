from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx
import lxml.html
from lxml import etree
from trafilatura import extract

from .config import DEFAULT_CRAWL_CONFIG, CrawlConfig

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    url: str
    text: str = ""
    links: list[str] = field(default_factory=list)


def extract_text(html: str) -> str:
    """Main readable text of an HTML document, or "" when nothing can be extracted."""
    if not html:
        return ""
    try:
        text = extract(html, include_comments=False, include_tables=True)
    except (ValueError, etree.LxmlError):
        logger.warning("Text extraction failed", exc_info=True)
        return ""
    return (text or "").strip()


def extract_links(html: str, base_url: str) -> list[str]:
    """Absolute http(s) links found in *html*, first occurrence order, without duplicates."""
    if not html:
        return []
    try:
        doc = lxml.html.fromstring(html)
    except (ValueError, etree.LxmlError):
        logger.warning("Could not parse HTML from %s", base_url, exc_info=True)
        return []
    doc.make_links_absolute(base_url, resolve_base_href=True)

    links: list[str] = []
    seen: set[str] = set()
    for element, attribute, link, _ in doc.iterlinks():
        if element.tag != "a" or attribute != "href":
            continue
        link = link.split("#", 1)[0]
        if not link.startswith(("http://", "https://")) or link in seen:
            continue
        seen.add(link)
        links.append(link)
    return links


def fetch_page(
    url: str,
    client: httpx.Client | None = None,
    config: CrawlConfig = DEFAULT_CRAWL_CONFIG,
) -> FetchedPage:
    """Download *url* and return its text and outgoing links.

    Network errors, timeouts, malformed URLs and non-2xx responses yield an
    empty page.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=config.timeout,
            follow_redirects=True,
            headers={"User-Agent": config.user_agent},
        )
    try:
        response = client.get(url)
        response.raise_for_status()
        html = response.text
    except (httpx.HTTPError, httpx.InvalidURL):
        logger.warning("Fetching %s failed, using empty content", url, exc_info=True)
        return FetchedPage(url=url)
    finally:
        if owns_client:
            client.close()

    return FetchedPage(url=url, text=extract_text(html), links=extract_links(html, url))
