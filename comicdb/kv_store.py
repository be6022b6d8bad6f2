"""
Key-value backends for persisted catalog state.
A slot holds one serialized JSON document.
"""

from pathlib import Path  # filesystem-safe paths
from typing import Dict, Optional

from loguru import logger  # console logging


class MemoryKeyValueStore:
	"""Dict-backed slots; used by tests and throwaway sessions."""

	def __init__(self, initial: Optional[Dict[str, str]] = None):
		self._slots: Dict[str, str] = dict(initial or {})

	def get(self, slot: str) -> Optional[str]:
		return self._slots.get(slot)

	def set(self, slot: str, value: str):
		self._slots[slot] = value

	def delete(self, slot: str):
		self._slots.pop(slot, None)

	def __contains__(self, slot: str) -> bool:
		return slot in self._slots


class JsonFileKeyValueStore:
	"""
	One file per slot (<directory>/<slot>.json).
	The directory is created on first write.
	"""

	def __init__(self, directory: str):
		self.directory = Path(directory)  # where slot files live

	def _path(self, slot: str) -> Path:
		return self.directory / f"{slot}.json"

	def get(self, slot: str) -> Optional[str]:
		path = self._path(slot)
		if not path.exists():  # nothing persisted yet
			return None
		return path.read_text(encoding='utf-8')

	def set(self, slot: str, value: str):
		self.directory.mkdir(parents=True, exist_ok=True)  # ensure exists
		path = self._path(slot)
		# write next to the target then swap, so a crash never leaves half a document
		tmp = path.with_suffix('.json.tmp')
		tmp.write_text(value, encoding='utf-8')
		tmp.replace(path)
		logger.debug(f"[KVStore] Wrote slot '{slot}' ({len(value)} chars) to {path}")

	def delete(self, slot: str):
		path = self._path(slot)
		if path.exists():
			path.unlink()
			logger.debug(f"[KVStore] Deleted slot '{slot}'")

	def __contains__(self, slot: str) -> bool:
		return self._path(slot).exists()
