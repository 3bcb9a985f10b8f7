"""
Shared test fixtures.

The sample gazetteer covers two provinces of the US, one of France and one
of India, plus a short row that the loader must skip.
"""

from pathlib import Path

import pytest

from distribution_rights.config.settings import AppConfig, CatalogConfig, StoreConfig
from distribution_rights.regions.catalog import RegionCatalog, load_catalog
from distribution_rights.system import DistributionSystem
from distribution_rights.tools import clear_catalog_cache

GAZETTEER = """\
city_code,province_code,country_code,city_name,province_name,country_name
NYC,NY,US,New York City,New York,United States
BUF,NY,US,Buffalo,New York,United States
LA,CA,US,Los Angeles,California,United States
SF,CA,US,San Francisco,California,United States
PAR,IDF,FR,Paris,Ile-de-France,France
CHE,TN,IN,Chennai,Tamil Nadu,India
BAD,ROW
"""


@pytest.fixture(autouse=True)
def _fresh_catalog_cache():
    clear_catalog_cache()
    yield
    clear_catalog_cache()


@pytest.fixture
def gazetteer(tmp_path) -> Path:
    path = tmp_path / "cities.csv"
    path.write_text(GAZETTEER, encoding="utf-8")
    return path


@pytest.fixture
def catalog(gazetteer) -> RegionCatalog:
    return load_catalog(gazetteer)


@pytest.fixture
def system(catalog) -> DistributionSystem:
    return DistributionSystem(catalog)


@pytest.fixture
def config(tmp_path, gazetteer) -> AppConfig:
    return AppConfig(
        catalog=CatalogConfig(csv_path=str(gazetteer)),
        store=StoreConfig(data_path=str(tmp_path / "distributors.json")),
    )
