"""
Content Gateway
===============

Read-through access to published editorial content (columns, interviews).

Stages, in order, for both listings and detail lookups:

1. remote: the WordPress REST API at ``WP_BASE_URL`` (skipped when unset)
2. local: published rows of the ``articles`` table
3. samples: the built-in entries in ``sample_content``

A stage that fails or answers with nothing hands over to the next one.
Listings therefore always return something; a detail lookup that no stage
can answer raises ``NotFound``.

Remote endpoint shapes
----------------------
WordPress exposes its REST API either under pretty permalinks
(``{base}/wp-json/wp/v2/<resource>``) or through the ``rest_route`` query
parameter (``{base}/?rest_route=/wp/v2/<resource>``). Both are tried in that
order; the shape that answered and the category name/slug → id map share
one ``TTLCache`` and are rebuilt together once it expires.
"""

import logging
import time
from typing import Callable, Optional

import httpx

from techmatch.api.sample_content import sample_articles
from techmatch.database.config.config import Settings
from techmatch.database.core.articles import (
    estimate_read_time_minutes,
    get_published_article,
    list_published_articles,
    read_time_label,
    strip_html,
)
from techmatch.errors import NotFound, StoreFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "編集部"
PAGE_SIZE = 100
ENDPOINT_SHAPES = ("wp-json", "rest_route")


class TTLCache:
    """
    A single cached value with a load time and a time-to-live.

    ``get`` returns None once ``ttl`` seconds have passed since ``set``.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self.value = None
        self.loaded_at: Optional[float] = None

    def get(self):
        if self.loaded_at is None or self.clock() - self.loaded_at > self.ttl:
            return None
        return self.value

    def set(self, value) -> None:
        self.value = value
        self.loaded_at = self.clock()

    def clear(self) -> None:
        self.value = None
        self.loaded_at = None


class WordPressSource:
    """
    Client for the WordPress REST API.

    Parameters
    ----------
    base_url : str
        Site root, e.g. ``https://example.jp/blog``.
    category_names : dict
        Article type → WordPress category name or slug holding that type.
    client : httpx.Client | None
        Injected client (tests use ``httpx.MockTransport``); one is created
        with ``timeout`` otherwise.
    cache : TTLCache | None
        Holds the resolved endpoint shape and category map.
    """

    def __init__(self, base_url: str, category_names: dict, client: Optional[httpx.Client] = None,
                 timeout: float = 10.0, cache: Optional[TTLCache] = None):
        self.base_url = base_url.rstrip("/")
        self.category_names = category_names
        self.client = client or httpx.Client(timeout=timeout, headers={"Accept": "application/json"})
        self.cache = cache or TTLCache(600.0)

    def _state(self) -> dict:
        state = self.cache.get()
        if state is None:
            state = {"shape": None, "categories": None}
            self.cache.set(state)
        return state

    def _endpoint(self, shape: str, resource: str) -> tuple[str, dict]:
        if shape == "wp-json":
            return f"{self.base_url}/wp-json/wp/v2/{resource}", {}
        return f"{self.base_url}/", {"rest_route": f"/wp/v2/{resource}"}

    def _get_json(self, resource: str, params: Optional[dict] = None, expect: type = list):
        """
        GET ``resource`` trying each endpoint shape, preferred shape first.

        A successful response whose JSON body is not an ``expect`` (for
        instance a ``{"code": "rest_forbidden", ...}`` object where a list
        was asked for) counts as a failed shape.

        Raises
        ------
        UpstreamUnavailable
            If no shape answers with a successful JSON response of the
            expected type.
        """
        state = self._state()
        shapes = list(ENDPOINT_SHAPES)
        if state["shape"] in shapes:
            shapes.remove(state["shape"])
            shapes.insert(0, state["shape"])

        last_error = None
        for shape in shapes:
            url, shape_params = self._endpoint(shape, resource)
            try:
                response = self.client.get(url, params={**shape_params, **(params or {})})
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.info("WordPress %s via %s failed: %s", resource, shape, e)
                last_error = e
                continue
            if not isinstance(data, expect):
                logger.info("WordPress %s via %s answered %s instead of %s", resource, shape,
                            type(data).__name__, expect.__name__)
                last_error = f"unexpected {type(data).__name__} body"
                continue
            state["shape"] = shape
            return data
        raise UpstreamUnavailable(f"WordPress request for {resource} failed: {last_error}")

    def category_id(self, name: str) -> Optional[int]:
        """Id of the category whose name or slug is ``name``."""
        state = self._state()
        if state["categories"] is None:
            categories = self._get_json("categories", {"per_page": PAGE_SIZE})
            mapping = {}
            for category in categories:
                if not isinstance(category, dict):
                    continue
                mapping[category.get("name")] = category.get("id")
                mapping[category.get("slug")] = category.get("id")
            state["categories"] = mapping
        return state["categories"].get(name)

    def list_posts(self, article_type: str) -> list[dict]:
        """Posts of the category mapped to ``article_type``; [] if it is unknown."""
        name = self.category_names.get(article_type)
        category_id = self.category_id(name) if name else None
        if category_id is None:
            logger.warning("WordPress category %r not found", name)
            return []
        posts = self._get_json("posts", {"categories": category_id, "per_page": PAGE_SIZE, "_embed": 1})
        return [post_to_article(post, article_type) for post in posts if isinstance(post, dict)]

    def get_post(self, article_id: str, article_type: str) -> Optional[dict]:
        """A single post; None for ids WordPress cannot have (non-numeric)."""
        if not str(article_id).isdigit():
            return None
        post = self._get_json(f"posts/{article_id}", {"_embed": 1}, expect=dict)
        return post_to_article(post, article_type)

    def close(self) -> None:
        self.client.close()


def _rendered(post: dict, key: str) -> str:
    value = post.get(key) or {}
    return value.get("rendered") or "" if isinstance(value, dict) else str(value)


def _dicts(value) -> list[dict]:
    return [item for item in value if isinstance(item, dict)] if isinstance(value, list) else []


def post_to_article(post: dict, article_type: str) -> dict:
    """Map a WordPress post (``_embed`` form) to the public article detail projection."""
    embedded = post.get("_embedded")
    if not isinstance(embedded, dict):
        embedded = {}
    term_groups = embedded.get("wp:term")
    first_group = term_groups[0] if isinstance(term_groups, list) and term_groups else []
    categories = [t for t in _dicts(first_group) if t.get("taxonomy") == "category"]
    primary = categories[0] if categories else {}
    authors = _dicts(embedded.get("author"))
    media = _dicts(embedded.get("wp:featuredmedia"))
    content = _rendered(post, "content")
    return {
        "id": str(post.get("id")),
        "type": article_type,
        "title": strip_html(_rendered(post, "title")),
        "description": strip_html(_rendered(post, "excerpt")),
        "content": content,
        "category": primary.get("slug") or "",
        "category_name": primary.get("name") or "",
        "author": (authors[0].get("name") if authors else None) or DEFAULT_AUTHOR,
        "researcher": None,
        "affiliation": None,
        "featured_image": (media[0].get("source_url") if media else None) or None,
        "created_at": post.get("date"),
        "read_time": estimate_read_time_minutes(strip_html(content)),
    }


def _matches_category(article: dict, category: str) -> bool:
    return category in (article.get("category"), article.get("category_name"))


def with_page_keys(article: dict) -> dict:
    """
    Add the camelCase keys the static pages read (``readTime`` as ``"N分"``,
    ``createdAt``, ``featuredImage``) next to the snake_case ones.
    """
    return {
        **article,
        "readTime": read_time_label(article.get("read_time") or 1),
        "createdAt": article.get("created_at"),
        "featuredImage": article.get("featured_image"),
    }


class ContentGateway:
    """
    Published editorial content with remote → local → sample fallback.

    Parameters
    ----------
    remote : WordPressSource | None
        Remote source; None skips the remote stage.
    samples : callable
        ``article_type -> list[dict]`` returning the final fallback entries.
    """

    def __init__(self, remote: Optional[WordPressSource] = None,
                 samples: Callable[[str], list[dict]] = sample_articles):
        self.remote = remote
        self.samples = samples

    def _first_available(self, stages: list[tuple[str, Callable]]):
        """Return ``(stage, result)`` for the first stage with a non-empty result."""
        for stage, load in stages:
            try:
                result = load()
            except (UpstreamUnavailable, StoreFailure, NotFound, httpx.HTTPError) as e:
                logger.warning("Content stage %s unavailable: %s", stage, e)
                continue
            if result:
                return stage, result
            logger.info("Content stage %s returned nothing", stage)
        return None, None

    def list_articles(self, article_type: str, category: Optional[str] = None) -> list[dict]:
        """
        Public summaries for ``article_type``, optionally filtered by
        category slug or name (``all`` means no filter).
        """
        stages = []
        if self.remote is not None:
            stages.append(("remote", lambda: self.remote.list_posts(article_type)))
        stages.append(("local", lambda: list_published_articles(article_type=article_type)))
        stages.append(("samples", lambda: self.samples(article_type)))

        stage, articles = self._first_available(stages)
        logger.debug("Serving %s list from %s", article_type, stage)
        articles = articles or []
        if category and category != "all":
            articles = [article for article in articles if _matches_category(article, category)]
        return [with_page_keys({k: v for k, v in article.items() if k != "content"}) for article in articles]

    def get_article(self, article_id: str, article_type: str) -> dict:
        """
        Public detail for one article.

        Raises
        ------
        NotFound
            If no stage knows ``article_id`` for ``article_type``.
        """
        def from_samples():
            return next((a for a in self.samples(article_type) if a["id"] == str(article_id)), None)

        stages = []
        if self.remote is not None:
            stages.append(("remote", lambda: self.remote.get_post(article_id, article_type)))
        stages.append(("local", lambda: get_published_article(article_id=article_id, article_type=article_type)))
        stages.append(("samples", from_samples))

        _, article = self._first_available(stages)
        if article is None:
            raise NotFound("Article not found")
        return with_page_keys(article)

    def close(self) -> None:
        if self.remote is not None:
            self.remote.close()


def build_content_gateway(config: Settings) -> ContentGateway:
    """Gateway wired from settings; no remote stage when ``WP_BASE_URL`` is empty."""
    remote = None
    if config.WP_BASE_URL:
        remote = WordPressSource(
            config.WP_BASE_URL,
            {"column": config.WP_COLUMN_CATEGORY, "interview": config.WP_INTERVIEW_CATEGORY},
            timeout=config.WP_TIMEOUT_SECONDS,
            cache=TTLCache(config.CONTENT_CACHE_TTL_SECONDS),
        )
    return ContentGateway(remote)
