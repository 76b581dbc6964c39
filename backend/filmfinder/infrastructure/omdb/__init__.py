from filmfinder.infrastructure.omdb.omdb_client import OMDbClient

__all__ = ["OMDbClient"]
