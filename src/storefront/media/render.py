"""Image tag rendering.

ImageRenderer is the <img> primitive. safe_image() guards it: only a
ValidSource is ever forwarded, everything else renders as empty markup.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from jinja2 import BaseLoader, Environment, select_autoescape
from markupsafe import Markup

from storefront.media.source import ValidSource, classify_source

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_URL = "https://placehold.co/80x80.png"

IMG_TEMPLATE = (
    "<img src=\"{{ src|e }}\""
    "{% for name, value in attrs %}"
    "{% if value is sameas true %} {{ name|e }}"
    "{% else %} {{ name|e }}=\"{{ value|e }}\"{% endif %}"
    "{% endfor %}>"
)

_REPEATED_UPLOADS = re.compile(r"/uploads/+")
_ATTRIBUTE_NAME = re.compile(r"[A-Za-z][\w-]*\Z")


def _attribute_name(name: str) -> str:
    # class_ -> class, data_src -> data-src
    normalized = name.rstrip("_").replace("_", "-")
    if not _ATTRIBUTE_NAME.match(normalized):
        raise ValueError(f"Invalid attribute name: {name!r}")
    return normalized


class ImageRenderer:
    """Renders <img> tags through an autoescaping Jinja2 environment."""

    def __init__(self, env: Environment | None = None):
        """Initialize renderer.

        Args:
            env: Optional Jinja2 environment. A private autoescaping
                environment is created when omitted.
        """
        self.env = env or Environment(
            autoescape=select_autoescape(default=True, default_for_string=True)
        )
        self._template = self.env.from_string(IMG_TEMPLATE)

    def render(self, src: str, **attrs: Any) -> Markup:
        """Render an <img> tag.

        Args:
            src: Image URL or path.
            **attrs: HTML attributes. None and False values are dropped,
                True renders a bare attribute.

        Returns:
            Markup for the tag.

        Raises:
            ValueError: If an attribute name is not a plain HTML name
                (letter first, then letters, digits, "-" or "_").
        """
        items = [
            (_attribute_name(name), value)
            for name, value in attrs.items()
            if value is not None and value is not False
        ]
        return Markup(self._template.render(src=src, attrs=items))


_default_renderer: ImageRenderer | None = None


def _get_default_renderer() -> ImageRenderer:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = ImageRenderer()
    return _default_renderer


def safe_image(src: Any, renderer: ImageRenderer | None = None, **props: Any) -> Markup:
    """Render an image only when its source is usable.

    Args:
        src: Candidate source of unknown shape.
        renderer: Underlying primitive; defaults to a shared ImageRenderer.
        **props: Passed through to the renderer unchanged.

    Returns:
        The rendered tag, or empty Markup when src is missing, not a
        string, or blank.
    """
    source = classify_source(src)
    if not isinstance(source, ValidSource):
        logger.debug(f"Skipping image render: {source}")
        return Markup("")
    return (renderer or _get_default_renderer()).render(source.text, **props)


def clean_image_url(url: str | None, fallback: str = DEFAULT_FALLBACK_URL) -> str:
    """Normalize stored upload paths.

    Args:
        url: Stored image URL or upload path.
        fallback: Returned when url is empty.

    Returns:
        External URLs unchanged; upload paths as "/uploads/<name>".
    """
    if not url:
        return fallback

    if url.startswith(("http://", "https://")):
        return url

    cleaned = url
    while "/uploads//uploads/" in cleaned:
        cleaned = cleaned.replace("/uploads//uploads/", "/uploads/")
    cleaned = _REPEATED_UPLOADS.sub("/uploads/", cleaned)

    if cleaned.startswith("uploads/"):
        cleaned = f"/{cleaned}"

    if not cleaned.startswith("/") and "://" not in cleaned:
        cleaned = f"/uploads/{cleaned}"

    return cleaned


def fallback_image(
    src: Any,
    fallback: str | None = None,
    renderer: ImageRenderer | None = None,
    **props: Any,
) -> Markup:
    """Render an image that swaps to a placeholder if it fails to load.

    The cleaned source is rendered directly; the fallback URL is carried in
    a data-fallback attribute for the page script to swap in.

    Args:
        src: Stored image URL or upload path.
        fallback: Placeholder URL; defaults to DEFAULT_FALLBACK_URL.
        renderer: Underlying primitive.
        **props: Passed through to the renderer.

    Returns:
        Markup for the tag.
    """
    fallback = fallback or DEFAULT_FALLBACK_URL
    source = classify_source(src)
    url = source.text if isinstance(source, ValidSource) else None
    final_src = clean_image_url(url, fallback)
    if url is not None and final_src != url:
        logger.debug(f"Image URL cleaned: {url} -> {final_src}")
    return safe_image(final_src, renderer=renderer, data_fallback=fallback, **props)


def register_globals(env: Environment, fallback_url: str | None = None) -> Environment:
    """Expose safe_image and fallback_image to templates.

    Args:
        env: Jinja2 environment used for page rendering.
        fallback_url: Default placeholder for fallback_image.

    Returns:
        The same environment, for chaining.
    """
    renderer = ImageRenderer(env)

    def _safe_image(src: Any, **props: Any) -> Markup:
        return safe_image(src, renderer=renderer, **props)

    def _fallback_image(src: Any, **props: Any) -> Markup:
        props.setdefault("fallback", fallback_url)
        return fallback_image(src, renderer=renderer, **props)

    env.globals["safe_image"] = _safe_image
    env.globals["fallback_image"] = _fallback_image
    return env


def create_environment(
    fallback_url: str | None = None,
    loader: BaseLoader | None = None,
) -> Environment:
    """Create the Jinja2 environment used for server-rendered pages.

    Args:
        fallback_url: Default placeholder for fallback_image.
        loader: Optional template loader.

    Returns:
        Autoescaping environment with the image globals registered.
    """
    env = Environment(loader=loader, autoescape=select_autoescape(["html", "xml"]))
    return register_globals(env, fallback_url)
