import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))


def _hit(tmdb_id: int, media_type: str, **fields):
    return {"id": tmdb_id, "media_type": media_type, **fields}


class TestTmdbResultMapping(unittest.TestCase):
    def test_movie_fields(self) -> None:
        from infrastructure.catalog.tmdb_client import _to_result

        result = _to_result(
            _hit(
                157336,
                "movie",
                title="星际穿越",
                name="ignored",
                overview="穿越虫洞。",
                vote_average=8.4,
                release_date="2014-11-05",
                poster_path="/p.jpg",
            ),
            image_base_url="https://image.tmdb.org/t/p/w500",
            external_id="tt0816692",
        )
        self.assertEqual(
            result,
            {
                "catalogId": 157336,
                "mediaType": "movie",
                "title": "星际穿越",
                "overview": "穿越虫洞。",
                "rating": 8.4,
                "releaseDate": "2014-11-05",
                "posterPath": "https://image.tmdb.org/t/p/w500/p.jpg",
                "externalId": "tt0816692",
            },
        )

    def test_tv_fields_and_defaults(self) -> None:
        from infrastructure.catalog.tmdb_client import _to_result

        result = _to_result(
            _hit(1396, "tv", name="绝命毒师", first_air_date="2008-01-20"),
            image_base_url="https://img",
            external_id=None,
        )
        self.assertEqual(result["mediaType"], "series")
        self.assertEqual(result["title"], "绝命毒师")
        self.assertEqual(result["overview"], "暂无简介")
        self.assertIsNone(result["rating"])
        self.assertEqual(result["releaseDate"], "2008-01-20")
        self.assertIsNone(result["posterPath"])


class TestTmdbClientSearch(unittest.IsolatedAsyncioTestCase):
    async def test_configured_requires_auth(self) -> None:
        from infrastructure.catalog.tmdb_client import TMDBClient

        self.assertFalse(TMDBClient(api_key="", api_token="").configured)
        self.assertTrue(TMDBClient(api_key="k", api_token="").configured)

    async def test_auth_prefers_bearer_token(self) -> None:
        from infrastructure.catalog.tmdb_client import TMDBClient

        client = TMDBClient(api_key="k", api_token="tok")
        self.assertEqual(client._auth_params(), {})
        self.assertEqual(client._headers()["Authorization"], "Bearer tok")
        key_only = TMDBClient(api_key="k", api_token="")
        self.assertEqual(key_only._auth_params(), {"api_key": "k"})
        self.assertNotIn("Authorization", key_only._headers())

    async def test_search_filters_limits_and_enriches(self) -> None:
        from infrastructure.catalog.tmdb_client import TMDBClient

        client = TMDBClient(api_key="k", api_token="", language="zh-CN", max_results=2)
        raw = {
            "results": [
                _hit(1, "person", name="Someone"),
                _hit(2, "movie", title="A"),
                "garbage",
                _hit(3, "tv", name="B"),
                _hit(4, "movie", title="C"),
            ]
        }

        async def _imdb(media_type, tmdb_id):
            return {2: "tt2"}.get(tmdb_id)

        with patch.object(client, "search_multi_raw", AsyncMock(return_value=raw)) as search_raw, patch.object(
            client, "fetch_imdb_id", AsyncMock(side_effect=_imdb)
        ) as fetch:
            results = await client.search("q")

        search_raw.assert_awaited_once_with(query="q", language="zh-CN")
        self.assertEqual([r["catalogId"] for r in results], [2, 3])
        self.assertEqual([r["externalId"] for r in results], ["tt2", None])
        self.assertEqual(fetch.await_count, 2)
        fetch.assert_any_await("tv", 3)

    async def test_search_without_auth_is_upstream_failure(self) -> None:
        from domain.wishlist import UpstreamFailure
        from infrastructure.catalog.tmdb_client import TMDBClient

        client = TMDBClient(api_key="", api_token="")
        with self.assertRaises(UpstreamFailure):
            await client.search("q")
        await client.close()


if __name__ == "__main__":
    unittest.main()
