CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "*",
}
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

UA_HEADER = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
}

# Media-server request headers (also accepted as query parameters)
LANGUAGE_HEADER = "X-Plex-Language"
COUNTRY_HEADER = "X-Plex-Country"
CONTAINER_SIZE_HEADER = "X-Plex-Container-Size"
CONTAINER_START_HEADER = "X-Plex-Container-Start"

LIBRARY_METADATA_PATH = "/library/metadata"
LIBRARY_MATCHES_PATH = "/library/metadata/matches"

# ISO 3166-1 alpha-2 -> TVDB content rating country codes
CONTENT_RATING_COUNTRIES = {
    "US": "usa",
    "GB": "gbr",
    "CA": "can",
    "AU": "aus",
    "NZ": "nzl",
    "IE": "irl",
    "DE": "deu",
    "FR": "fra",
    "ES": "esp",
    "IT": "ita",
    "NL": "nld",
    "BR": "bra",
    "MX": "mex",
    "JP": "jpn",
    "KR": "kor",
    "IN": "ind",
}

MS_PER_MINUTE = 60 * 1000
