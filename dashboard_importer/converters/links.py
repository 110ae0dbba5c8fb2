"""
Dashboard and panel link conversion.
"""

SUPPORTED_LINK_TYPE = "link"


def convert_links(links):
    """
    Keep plain URL links and reshape them; other link kinds are dropped.

    Args:
        links (list): Foreign links, may be ``None``

    Returns:
        list: ``[{"title", "url", "targetBlank"}]``
    """
    return [
        {
            "title": link.get("title"),
            "url": link.get("url"),
            "targetBlank": link.get("targetBlank"),
        }
        for link in links or []
        if isinstance(link, dict) and link.get("type") == SUPPORTED_LINK_TYPE
    ]
