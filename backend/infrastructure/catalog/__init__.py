from infrastructure.catalog.tmdb_client import TMDBClient

__all__ = ["TMDBClient"]
