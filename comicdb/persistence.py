"""
Persistence module.
Loads and saves the four catalog slots (comics, option lists, category definitions,
site config) through an injected key-value backend. A missing or unreadable slot
falls back to its built-in default; loading never raises.
"""

import json  # slot documents are JSON text
from dataclasses import asdict  # dataclass -> dict
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from loguru import logger
from pydantic import ValidationError

from .data_loader import DataLoader
from .defaults import default_category_definitions, default_category_options, default_site_config
from .errors import MalformedPersistedStateError
from .models import CategoryDefinition, Comic, SiteConfig
from .schemas import CategoryDefinitionsPayload, CategoryOptionsPayload, SiteConfigPayload

T = TypeVar('T')

# Slot names; the version suffix changes whenever the slot's shape does
SLOT_COMICS = 'kocca_comics_db_v1'
SLOT_CATEGORY_OPTIONS = 'kocca_categories_data_v2'
SLOT_CATEGORY_DEFINITIONS = 'kocca_categories_defs_v1'
SLOT_SITE_CONFIG = 'kocca_site_config_v1'
ALL_SLOTS = (SLOT_COMICS, SLOT_CATEGORY_OPTIONS, SLOT_CATEGORY_DEFINITIONS, SLOT_SITE_CONFIG)


class CatalogPersistence:
	"""
	Reads/writes catalog state in named slots of a key-value backend.
	The backend needs get(slot), set(slot, text) and delete(slot).
	"""

	def __init__(self, kv_store, seed_path: str, data_loader: Optional[DataLoader] = None):
		self.kv_store = kv_store  # injected backend
		self.seed_path = Path(seed_path)  # built-in comics (JSONL)
		self.data_loader = data_loader or DataLoader()

	# --- defaults ---

	def default_comics(self) -> List[Comic]:
		try:
			return self.data_loader.load_comics_from_jsonl(str(self.seed_path))
		except FileNotFoundError as e:
			logger.warning(f"[Persistence] No built-in comics available: {e}")
			return []

	# --- load ---

	def load_comics(self) -> List[Comic]:
		return self._load(SLOT_COMICS, self._parse_comics, self.default_comics)

	def load_definitions(self) -> List[CategoryDefinition]:
		return self._load(SLOT_CATEGORY_DEFINITIONS, self._parse_definitions, default_category_definitions)

	def load_options(self) -> Dict[str, List[str]]:
		return self._load(SLOT_CATEGORY_OPTIONS, self._parse_options, default_category_options)

	def load_site_config(self) -> SiteConfig:
		return self._load(SLOT_SITE_CONFIG, self._parse_site_config, default_site_config)

	def _load(self, slot: str, parse: Callable[[str, object], T], default: Callable[[], T]) -> T:
		try:
			raw = self._read(slot)
			if raw is None:
				logger.info(f"[Persistence] Slot '{slot}' empty, using built-in defaults")
				return default()
			value = parse(slot, self._decode(slot, raw))
		except MalformedPersistedStateError as e:
			logger.warning(f"[Persistence] {e}; falling back to built-in defaults")
			return default()
		logger.info(f"[Persistence] Loaded slot '{slot}'")
		return value

	def _read(self, slot: str) -> Optional[str]:
		try:
			return self.kv_store.get(slot)
		except (OSError, UnicodeDecodeError) as e:
			raise MalformedPersistedStateError(slot, f"unreadable: {e}") from e

	def _decode(self, slot: str, raw: str):
		try:
			return json.loads(raw)
		except json.JSONDecodeError as e:
			raise MalformedPersistedStateError(slot, f"invalid JSON: {e}") from e

	def _parse_comics(self, slot: str, data) -> List[Comic]:
		if not isinstance(data, list):
			raise MalformedPersistedStateError(slot, "expected a list of comics")
		comics = []
		for index, entry in enumerate(data):
			try:
				comics.append(self.data_loader.parse_comic(entry))
			except (TypeError, ValueError) as e:
				raise MalformedPersistedStateError(slot, f"comic #{index}: {e}") from e
		return comics

	def _parse_definitions(self, slot: str, data) -> List[CategoryDefinition]:
		try:
			payload = CategoryDefinitionsPayload.model_validate(data)
		except ValidationError as e:
			raise MalformedPersistedStateError(slot, str(e)) from e
		return [definition.to_model() for definition in payload.root]

	def _parse_options(self, slot: str, data) -> Dict[str, List[str]]:
		try:
			payload = CategoryOptionsPayload.model_validate(data)
		except ValidationError as e:
			raise MalformedPersistedStateError(slot, str(e)) from e
		return payload.root

	def _parse_site_config(self, slot: str, data) -> SiteConfig:
		try:
			payload = SiteConfigPayload.model_validate(data)
		except ValidationError as e:
			raise MalformedPersistedStateError(slot, str(e)) from e
		return payload.to_model()

	# --- save ---

	def save_comics(self, comics: List[Comic]):
		self._save(SLOT_COMICS, [self.data_loader.comic_to_dict(comic) for comic in comics])

	def save_definitions(self, definitions: List[CategoryDefinition]):
		self._save(SLOT_CATEGORY_DEFINITIONS, [asdict(definition) for definition in definitions])

	def save_options(self, options: Dict[str, List[str]]):
		self._save(SLOT_CATEGORY_OPTIONS, options)

	def save_site_config(self, config: SiteConfig):
		self._save(SLOT_SITE_CONFIG, asdict(config))

	def _save(self, slot: str, data):
		self.kv_store.set(slot, json.dumps(data, ensure_ascii=False))
		logger.debug(f"[Persistence] Saved slot '{slot}'")

	# --- reset ---

	def reset(self):
		"""Delete every persisted slot so the next load returns defaults."""
		for slot in ALL_SLOTS:
			self.kv_store.delete(slot)
		logger.info("[Persistence] All slots cleared")
