from .json_catalog_source import JsonFileCatalogSource

__all__ = [
    "JsonFileCatalogSource",
]
