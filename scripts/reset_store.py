"""
Reset the persisted catalog.

This script:
1) Resolves the store directory from COMICDB_* settings
2) Deletes the comics, option list, category definition and site config slots
3) Reloads the catalog to confirm the built-in data is in effect

Usage:
    python -m scripts.reset_store
"""

from loguru import logger  # console logging

from comicdb.catalog import Catalog  # stores + persistence
from comicdb.config import load_settings  # COMICDB_* environment settings


def main():
	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Reset Catalog Store")
	logger.info("=" * 60)

	# 1) Resolve settings
	settings = load_settings()
	logger.info(f"[1/3] Store directory: {settings.store_dir}")

	# 2) Clear every slot and restore defaults
	logger.info("[2/3] Clearing persisted slots...")
	catalog = Catalog.from_settings(settings)
	catalog.reset()

	# 3) Reload from disk to confirm nothing persisted survived
	logger.info("[3/3] Reloading...")
	reloaded = Catalog.from_settings(settings)
	logger.info(
		f"[OK] {len(reloaded.record_store)} comics, {len(reloaded.schema_store.list_definitions())} categories, title '{reloaded.site_config.main_title}'"
	)
	logger.info("=" * 60)


if __name__ == '__main__':
	main()  # invoke reset
