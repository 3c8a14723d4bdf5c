"""
Single-pass HTML scan collecting same-domain links and visible text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

PARSER = "lxml"


@dataclass(slots=True)
class ScanResult:
    """Links and text extracted from one page."""
    links: List[str] = field(default_factory=list)
    text: str = ""


def is_same_domain(page_url: str, href: Optional[str]) -> bool:
    """
    Check whether href points at the same origin as page_url.

    Root-relative hrefs ("/about") always count as same-domain. Otherwise
    scheme, host and port must all match. Unparseable hrefs never match.
    """
    if not href:
        return False
    if href.startswith("/"):
        return True

    try:
        page, target = urlsplit(page_url), urlsplit(href)
        return (page.scheme, page.hostname, page.port) == (target.scheme, target.hostname, target.port)
    except ValueError:
        return False


def build_full_url(page_url: str, href: str) -> str:
    """
    Rebuild href on page_url's origin.

    Only the path of href is kept; its query string and fragment are dropped.
    """
    page = urlsplit(page_url)
    path = urlsplit(href).path or "/"
    return urlunsplit((page.scheme, page.netloc, path, "", ""))


def scan(html: str, page_url: str) -> ScanResult:
    """
    Walk the parsed document once, in document order.

    Every text node contributes its stripped content plus one space. Comments,
    doctypes and other markup declarations are not text. Broken markup is
    recovered by the parser; whatever it yields is returned.
    """
    result = ScanResult()
    chunks: List[str] = []
    soup = BeautifulSoup(html or "", PARSER)

    for node in soup.descendants:
        if isinstance(node, Tag):
            if node.name == "a":
                href = node.get("href")
                if isinstance(href, str) and is_same_domain(page_url, href):
                    result.links.append(build_full_url(page_url, href))
        elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
            chunks.append(node.strip() + " ")

    result.text = "".join(chunks)
    return result
