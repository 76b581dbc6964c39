from filmfinder.infrastructure.persistence.key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
