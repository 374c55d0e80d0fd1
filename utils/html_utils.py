"""
HTML helpers for product descriptions.

The converters render artwork details into Body (HTML) as
"<strong>Dimensions:</strong> 30h x 40w x 2d". Duplicate detection reads the
dimensions back out of that markup for the review report.
"""

import re

_DIMENSIONS_LABEL_RE = re.compile(r"<strong>Dimensions:</strong>\s*([^<]+)", re.IGNORECASE)
_HEIGHT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*h", re.IGNORECASE)
_WIDTH_RE = re.compile(r"(\d+(?:\.\d+)?)\s*w", re.IGNORECASE)
_DEPTH_RE = re.compile(r"(\d+(?:\.\d+)?)\s*d", re.IGNORECASE)


def extract_dimensions(html: str) -> str:
    """
    Extract a dimensions string from product description HTML.

    Prefers the labelled "Dimensions:" field. Falls back to loose
    "<n>h", "<n>w", "<n>d" tokens anywhere in the markup.

    Args:
        html: Body (HTML) of a product row

    Returns:
        Dimensions such as "30h x 40w x 2d", or "" if none found
    """
    if not html:
        return ""

    labelled = _DIMENSIONS_LABEL_RE.search(html)
    if labelled and labelled.group(1).strip():
        return labelled.group(1).strip()

    parts = []
    for pattern, unit in ((_HEIGHT_RE, "h"), (_WIDTH_RE, "w"), (_DEPTH_RE, "d")):
        found = pattern.search(html)
        if found:
            parts.append(f"{found.group(1)}{unit}")

    return " x ".join(parts)
