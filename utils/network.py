from dataclasses import dataclass

from fastapi.requests import Request

from utils import const


@dataclass(frozen=True)
class RequestLocale:
    """Negotiated request locale.

    ``country`` selects the content rating. ``language`` is accepted and not
    used: TVDB is always queried in the process language (``tvdb_language``).
    """

    language: str
    country: str


@dataclass(frozen=True)
class Paging:
    """Container paging window; ``start`` is 1-based."""

    start: int = 1
    size: int = 20

    @property
    def offset(self) -> int:
        return self.start - 1

    def slice(self, items: list) -> list:
        return items[self.offset : self.offset + self.size]


def get_client_ip(request: Request) -> str | None:
    """
    Extract the client's real IP address from the request headers or fallback to the client host.
    """
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        # In some cases, this header can contain multiple IPs
        # separated by commas.
        # The first one is the original client's IP.
        return x_forwarded_for.split(",")[0].strip()
    # Fallback to X-Real-IP if X-Forwarded-For is not available
    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip:
        return x_real_ip
    return request.client.host if request.client else "127.0.0.1"


def get_header_or_query(request: Request, name: str) -> str | None:
    """Read a media-server parameter from the headers, falling back to the query string."""
    return request.headers.get(name) or request.query_params.get(name)


def get_request_locale(request: Request) -> RequestLocale:
    """Locale from X-Plex headers or query parameters, defaulting from the app settings."""
    app_settings = request.app.state.settings
    return RequestLocale(
        language=get_header_or_query(request, const.LANGUAGE_HEADER) or app_settings.default_language,
        country=get_header_or_query(request, const.COUNTRY_HEADER) or app_settings.default_country,
    )


def _parse_positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int(value) if value else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def get_request_paging(request: Request) -> Paging:
    app_settings = request.app.state.settings
    return Paging(
        start=_parse_positive_int(get_header_or_query(request, const.CONTAINER_START_HEADER), 1),
        size=_parse_positive_int(
            get_header_or_query(request, const.CONTAINER_SIZE_HEADER),
            app_settings.default_container_size,
        ),
    )
