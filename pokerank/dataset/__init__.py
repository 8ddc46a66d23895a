from pokerank.dataset.client import DatasetClient, HttpDatasetClient
from pokerank.dataset.config import DatasetConfig

__all__ = ["DatasetClient", "HttpDatasetClient", "DatasetConfig"]
