from filmfinder.application.ports.catalog_port import CatalogClientPort
from filmfinder.application.ports.key_value_storage_port import KeyValueStoragePort

__all__ = ["CatalogClientPort", "KeyValueStoragePort"]
