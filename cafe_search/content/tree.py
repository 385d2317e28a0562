from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

import httpx

from ..keywords.models import Keyword
from ..scoring.scorer import weighted_score
from .config import DEFAULT_CRAWL_CONFIG, CrawlConfig
from .fetcher import FetchedPage, fetch_page

logger = logging.getLogger(__name__)

Fetch = Callable[[str], FetchedPage]

DEPTH_DECAY = 0.1
LEVEL_DECAY = 0.9
CHILD_SHARE = 0.5


@dataclass
class WebNode:
    page: FetchedPage
    depth: int = 0
    children: list[WebNode] = field(default_factory=list)
    score: float = 0.0

    def walk(self) -> Iterator[WebNode]:
        """Pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.walk()


def build_tree(
    url: str,
    fetch: Fetch,
    config: CrawlConfig = DEFAULT_CRAWL_CONFIG,
) -> WebNode:
    """Fetch *url* and its linked pages up to ``config.max_depth`` levels deep.

    Each node keeps at most ``config.max_children`` children and a URL is
    fetched at most once per tree.
    """
    visited: set[str] = {url}
    root = WebNode(page=fetch(url), depth=0)
    _expand(root, fetch, config, visited)
    return root


def _expand(node: WebNode, fetch: Fetch, config: CrawlConfig, visited: set[str]) -> None:
    if node.depth >= config.max_depth:
        return
    for link in node.page.links:
        if len(node.children) >= config.max_children:
            break
        if link in visited:
            continue
        visited.add(link)
        child = WebNode(page=fetch(link), depth=node.depth + 1)
        node.children.append(child)
        _expand(child, fetch, config, visited)


def depth_weight(depth: int) -> float:
    return 1.0 / (1.0 + depth * DEPTH_DECAY)


def score_tree(node: WebNode, keywords: Iterable[Keyword], inherited: float = 1.0) -> float:
    """Post-order score of the tree rooted at *node*.

    A node's own keyword score is damped by its depth and by 0.9 per level of
    ancestry; half of its children's scores is then added on top.
    """
    keywords = list(keywords)
    own = weighted_score(node.page.text, keywords) * depth_weight(node.depth) * inherited
    children_total = sum(
        score_tree(child, keywords, inherited * LEVEL_DECAY) for child in node.children
    )
    node.score = own + children_total * CHILD_SHARE
    return node.score


def tree_text(node: WebNode) -> str:
    """Plain text of every page in the tree, root first."""
    return " ".join(n.page.text for n in node.walk() if n.page.text)


@dataclass(frozen=True)
class CrawlResult:
    text: str = ""
    score: float = 0.0
    pages: int = 0


def crawl_site(
    url: str,
    keywords: Iterable[Keyword],
    config: CrawlConfig = DEFAULT_CRAWL_CONFIG,
) -> CrawlResult:
    """Crawl a café site and return its combined text and keyword score.

    Unreachable pages contribute nothing, so a dead site yields an empty result.
    """
    with httpx.Client(
        timeout=config.timeout,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
    ) as client:
        tree = build_tree(url, lambda link: fetch_page(link, client=client, config=config), config)
    score = score_tree(tree, keywords)
    pages = sum(1 for _ in tree.walk())
    logger.debug("Crawled %d pages from %s (score %.2f)", pages, url, score)
    return CrawlResult(text=tree_text(tree), score=score, pages=pages)
