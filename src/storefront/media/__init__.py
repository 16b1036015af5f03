"""Image rendering for server-rendered pages.

Candidate image sources come from loosely typed data (CSV imports, product
metadata). They are classified once by classify_source() and only valid
sources ever reach the <img> primitive.
"""

from storefront.media.render import (
    ImageRenderer,
    clean_image_url,
    create_environment,
    fallback_image,
    register_globals,
    safe_image,
)
from storefront.media.source import (
    ImageSource,
    InvalidSource,
    MissingSource,
    ValidSource,
    classify_source,
)

__all__ = [
    # Source classification
    "ImageSource",
    "InvalidSource",
    "MissingSource",
    "ValidSource",
    "classify_source",
    # Rendering
    "ImageRenderer",
    "clean_image_url",
    "create_environment",
    "fallback_image",
    "register_globals",
    "safe_image",
]
