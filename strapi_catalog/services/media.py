# strapi_catalog/services/media.py

"""Turn CMS media paths into URLs a browser can load."""

from strapi_catalog.config.settings import ApiConfig


def get_strapi_media_url(url: str | None, config: ApiConfig) -> str:
    """Return a publicly reachable URL for the media *url*.

    Only the configured internal origin is rewritten, so resolving an
    already-public URL again returns it unchanged.
    """
    if not url:
        return config.placeholder_image
    if url == config.placeholder_image:
        return url

    if url.startswith(config.internal_media_origin):
        rest = url[len(config.internal_media_origin):]
        if not rest or rest[0] in "/?#":
            return config.public_media_url + rest

    if url.startswith(("http://", "https://")):
        return url

    if not url.startswith("/"):
        url = f"/{url}"
    return config.public_media_url + url
