"""
TMDB API HTTP client for catalog search.

Wraps TMDB's multi search and external-id lookups behind ``CatalogPort``: a
free-text query becomes a ranked list of movie/series candidates, each
enriched with its IMDb id.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from application.ports.catalog_port import CatalogPort
from domain.wishlist import MediaType, UpstreamFailure
from infrastructure.config.settings import (
    CATALOG_MAX_RESULTS,
    TMDB_API_KEY,
    TMDB_API_TOKEN,
    TMDB_BASE_URL,
    TMDB_IMAGE_BASE_URL,
    TMDB_LANGUAGE,
    TMDB_TIMEOUT_S,
)

logger = logging.getLogger(__name__)

_SEARCHABLE_TYPES = {"movie", "tv"}
_NO_OVERVIEW = "暂无简介"


def _to_result(item: dict[str, Any], *, image_base_url: str, external_id: str | None) -> dict[str, Any]:
    """Project a raw TMDB multi-search hit onto the catalog result shape."""
    tmdb_type = str(item.get("media_type") or "")
    title = item.get("title") if tmdb_type == "movie" else item.get("name")
    poster = item.get("poster_path")
    return {
        "catalogId": item.get("id"),
        "mediaType": MediaType.parse(tmdb_type).value,
        "title": title,
        "overview": item.get("overview") or _NO_OVERVIEW,
        "rating": item.get("vote_average"),
        "releaseDate": item.get("release_date") or item.get("first_air_date") or None,
        "posterPath": f"{image_base_url}{poster}" if poster else None,
        "externalId": external_id,
    }


class TMDBClient(CatalogPort):
    """Async HTTP client for TMDB API.

    Attributes:
        _base_url: TMDB API base URL
        _api_token: TMDB API bearer token (v4)
        _api_key: TMDB API key (v3, used when no bearer token is set)
        _timeout_s: Total request timeout in seconds
        _session: aiohttp ClientSession (lazily initialized)
        _lock: Async lock guarding session creation
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_token: str | None = None,
        api_key: str | None = None,
        timeout_s: float | None = None,
        language: str | None = None,
        image_base_url: str | None = None,
        max_results: int | None = None,
    ) -> None:
        self._base_url = (base_url or TMDB_BASE_URL or "").rstrip("/")
        self._api_token = (api_token if api_token is not None else TMDB_API_TOKEN or "").strip()
        self._api_key = (api_key if api_key is not None else TMDB_API_KEY or "").strip()
        self._timeout_s = float(timeout_s or TMDB_TIMEOUT_S or 10.0)
        self._language = language or TMDB_LANGUAGE
        self._image_base_url = (image_base_url or TMDB_IMAGE_BASE_URL).rstrip("/")
        self._max_results = int(max_results or CATALOG_MAX_RESULTS)
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()

    @property
    def configured(self) -> bool:
        return bool(self._base_url and (self._api_token or self._api_key))

    def _headers(self) -> dict[str, str]:
        headers = {"accept": "application/json"}
        # Prefer v4 bearer token auth when available.
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    def _auth_params(self) -> dict[str, str]:
        """v3 auth via api_key query param (used when bearer token is absent)."""
        if self._api_token:
            return {}
        if self._api_key:
            return {"api_key": self._api_key}
        return {}

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session (double-checked under ``_lock``)."""
        if self._session is not None and not self._session.closed:
            return self._session

        async with self._lock:
            if self._session is not None and not self._session.closed:
                return self._session

            timeout = aiohttp.ClientTimeout(total=self._timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
            return self._session

    async def search(self, query: str) -> list[dict[str, Any]]:
        raw = await self.search_multi_raw(query=query, language=self._language)
        results = raw.get("results", []) or []
        if not isinstance(results, list):
            results = []

        candidates = [
            r for r in results if isinstance(r, dict) and r.get("media_type") in _SEARCHABLE_TYPES
        ][: self._max_results]

        external_ids = await asyncio.gather(
            *(self.fetch_imdb_id(str(c["media_type"]), c.get("id")) for c in candidates)
        )
        return [
            _to_result(c, image_base_url=self._image_base_url, external_id=ext)
            for c, ext in zip(candidates, external_ids)
        ]

    async def search_multi_raw(self, *, query: str, language: str) -> dict[str, Any]:
        """Search across media types using TMDB's multi search (raw payload).

        Raises:
            UpstreamFailure: transport error, timeout, HTTP >= 400 or a non-object body.
        """
        if not self.configured:
            logger.warning("TMDB client not configured (missing base_url or auth)")
            raise UpstreamFailure()

        try:
            session = await self._get_session()
            url = f"{self._base_url}/search/multi"
            params: dict[str, Any] = {
                "query": query,
                "language": language,
                "page": 1,
                "include_adult": "false",
            }
            params.update(self._auth_params())

            logger.debug("TMDB multi search url=%s query=%s", url, query)

            async with session.get(url, params=params, headers=self._headers()) as resp:
                if resp.status >= 400:
                    error_text = await resp.text()
                    logger.error(f"TMDB multi search failed ({resp.status}): {error_text[:200]}")
                    raise UpstreamFailure()
                data = await resp.json(content_type=None)
        except UpstreamFailure:
            raise
        except asyncio.TimeoutError as exc:
            logger.error(f"TMDB multi search timeout after {self._timeout_s}s for '{query}'")
            raise UpstreamFailure() from exc
        except (aiohttp.ClientError, ValueError) as exc:
            logger.error(f"TMDB multi search failed for '{query}': {exc}")
            raise UpstreamFailure() from exc

        if not isinstance(data, dict):
            logger.error("TMDB multi search returned a non-object payload")
            raise UpstreamFailure()
        return data

    async def fetch_imdb_id(self, media_type: str, tmdb_id: Any) -> str | None:
        """Best-effort IMDb id lookup; failures are logged and yield None."""
        try:
            session = await self._get_session()
            url = f"{self._base_url}/{media_type}/{tmdb_id}/external_ids"
            async with session.get(url, params=self._auth_params(), headers=self._headers()) as resp:
                if resp.status >= 400:
                    error_text = await resp.text()
                    logger.warning(f"TMDB external ids failed ({resp.status}) for {media_type}/{tmdb_id}: {error_text[:200]}")
                    return None
                data = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning(f"TMDB external ids timeout after {self._timeout_s}s for {media_type}/{tmdb_id}")
            return None
        except (aiohttp.ClientError, ValueError) as exc:
            logger.warning(f"Failed to fetch imdb id for {media_type}/{tmdb_id}: {exc}")
            return None
        if not isinstance(data, dict):
            return None
        return data.get("imdb_id") or None

    async def close(self) -> None:
        """Close the HTTP session and release resources."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
