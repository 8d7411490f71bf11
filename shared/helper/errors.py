"""Errors raised by the CMS data access layer."""


class MarketplaceError(Exception):
    """Base exception for the marketplace CMS bridge."""
    pass


class NotFoundError(MarketplaceError):
    """A slug lookup returned zero rows."""

    def __init__(self, resource: str, slug: str) -> None:
        self.resource = resource
        self.slug = slug
        super().__init__(f"{resource.capitalize()} with slug '{slug}' not found")


class TransportError(MarketplaceError):
    """The CMS answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, url: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"Request to {url} failed with status {status_code}: {body}")
