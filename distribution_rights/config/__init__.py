from distribution_rights.config.settings import AppConfig, CatalogConfig, PolicyConfig, StoreConfig

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "PolicyConfig",
    "StoreConfig",
]
