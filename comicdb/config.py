"""
Runtime settings.
Values come from COMICDB_* environment variables, with defaults that work
from a repository checkout.
"""

from pathlib import Path  # filesystem-safe paths

from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root (one level above this package)
ROOT = Path(__file__).resolve().parents[1]

DEFAULT_STORE_DIR = ROOT / 'store'  # where JSON slot files are written
DEFAULT_SEED_PATH = ROOT / 'data' / 'comics.jsonl'  # built-in comic dataset
# 'kocca_wepm2009' salted and base64 encoded
DEFAULT_ADMIN_KEY = 'a29jY2Ffd2VwbTIwMDk='


class Settings(BaseSettings):
	"""COMICDB_STORE_DIR, COMICDB_SEED_PATH and COMICDB_ADMIN_KEY override the defaults."""

	model_config = SettingsConfigDict(env_prefix='COMICDB_')

	store_dir: Path = DEFAULT_STORE_DIR
	seed_path: Path = DEFAULT_SEED_PATH
	admin_key: str = DEFAULT_ADMIN_KEY


def load_settings() -> Settings:
	return Settings()
