"""Relative-link discovery in generated HTML.

Text scanning, not a DOM parser: every ``<a ... href="...">`` is considered.
"""

import re

_HREF = re.compile(r"""<a[^>]+href=["']([^"']+)["']""", re.IGNORECASE)

_EXCLUDED_PREFIXES = ("http://", "https://", "mailto:", "tel:", "#", "javascript:")
_ROOT_HREFS = {"/", "./", "../"}


def normalize_href(href: str) -> str | None:
    """Route for a relative ``href``, or None if it is not a subpage link.

    ``./contact.html?x=1#top`` -> ``/contact.html``; absolute URLs, mailto,
    tel, javascript, fragment-only and root links give None.
    """
    href = href.strip()
    if not href or href in _ROOT_HREFS or href.lower().startswith(_EXCLUDED_PREFIXES):
        return None

    route = href.split("?", 1)[0].split("#", 1)[0]
    while route.startswith(("./", "../")):
        route = route.split("/", 1)[1]
    route = route.lstrip("/")
    if not route:
        return None
    return f"/{route}"


def discover_links(html: str) -> list[str]:
    """Distinct subpage routes in document order."""
    routes: dict[str, None] = {}
    for match in _HREF.finditer(html):
        route = normalize_href(match.group(1))
        if route is not None:
            routes.setdefault(route)
    return list(routes)
