"""
Record store module.
Holds the comic collection. No checks against the schema are made here, so
comics may reference options or custom categories the schema no longer has.
"""

from typing import Iterable, List, Optional

from loguru import logger

from .models import Comic


class RecordStore:
	"""Ordered comic collection, newest first."""

	def __init__(self, comics: Optional[Iterable[Comic]] = None):
		self._comics: List[Comic] = list(comics or [])

	def replace(self, comics: Iterable[Comic]):
		self._comics = list(comics)
		logger.debug(f"[RecordStore] Collection replaced with {len(self._comics)} comics")

	def list(self) -> List[Comic]:
		return list(self._comics)

	def get(self, comic_id: str) -> Optional[Comic]:
		for comic in self._comics:
			if comic.id == comic_id:
				return comic
		return None

	def upsert(self, comic: Comic):
		"""Replace the comic with the same id in place, or prepend a new one."""
		for index, existing in enumerate(self._comics):
			if existing.id == comic.id:
				self._comics[index] = comic
				logger.info(f"[RecordStore] Updated comic '{comic.id}' at position {index}")
				return
		self._comics.insert(0, comic)
		logger.info(f"[RecordStore] Added comic '{comic.id}'")

	def remove(self, comic_id: str):
		before = len(self._comics)
		self._comics = [comic for comic in self._comics if comic.id != comic_id]
		if len(self._comics) != before:
			logger.info(f"[RecordStore] Removed comic '{comic_id}'")

	def __len__(self) -> int:
		return len(self._comics)
