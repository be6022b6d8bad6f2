"""
Catalog module.
Wires the stores, persistence and editors together, and evaluates a visitor's BrowseState.
"""

from dataclasses import dataclass, field, replace  # browse state; copy-with-changes for SiteConfig
from typing import Dict, List, Optional

from loguru import logger

from .access_gate import AccessGate
from .config import Settings, load_settings
from .defaults import default_category_definitions, default_category_options, default_site_config
from .editors import SchemaEditor, RecordEditor, toggle_value
from .filter_engine import evaluate
from .kv_store import JsonFileKeyValueStore
from .models import CategoryDefinition, Comic, SiteConfig
from .persistence import CatalogPersistence
from .record_store import RecordStore
from .schema_store import SchemaStore

# System categories edited in the admin form but not offered as sidebar filters
SIDEBAR_EXCLUDED_IDS = ('targetAges', 'genders')


@dataclass
class BrowseState:
	"""
	One visitor's filter selection and title search.
	The UI keeps one per session; the Catalog itself holds no browsing state.
	"""
	selection: Dict[str, List[str]] = field(default_factory=dict)  # category id -> selected options
	query: str = ''  # title search

	def toggle_filter(self, category_id: str, value: str):
		self.selection[category_id] = toggle_value(self.selection.get(category_id, []), value)

	def set_filter(self, category_id: str, values: List[str]):
		self.selection[category_id] = list(values)

	def set_query(self, query: str):
		self.query = query or ''

	def clear_filters(self):
		self.selection = {}
		self.query = ''

	def has_active_filters(self) -> bool:
		return bool(self.query) or any(self.selection.values())


class Catalog:
	"""
	High-level API used by the UI: load state, browse with filters, administer.
	"""

	def __init__(self, persistence: CatalogPersistence, admin_key: str):
		self.persistence = persistence
		self.gate = AccessGate(admin_key)

		# Each slot loads independently; a bad slot only resets itself
		logger.info("[Catalog] Loading persisted state...")
		self.schema_store = SchemaStore(persistence.load_definitions(), persistence.load_options())
		self.record_store = RecordStore(persistence.load_comics())
		self.site_config: SiteConfig = persistence.load_site_config()
		logger.info(
			f"[Catalog] Ready with {len(self.record_store)} comics and {len(self.schema_store.list_definitions())} categories"
		)

		self.schema_editor = SchemaEditor(self.schema_store, persistence)
		self.record_editor = RecordEditor(self.record_store, self.schema_store, persistence)

	@classmethod
	def from_settings(cls, settings: Optional[Settings] = None) -> 'Catalog':
		"""Catalog backed by JSON slot files in settings.store_dir."""
		settings = settings or load_settings()
		persistence = CatalogPersistence(JsonFileKeyValueStore(str(settings.store_dir)), str(settings.seed_path))
		return cls(persistence, settings.admin_key)

	# --- browsing ---

	def visible_comics(self, state: BrowseState) -> List[Comic]:
		return evaluate(
			self.record_store.list(),
			self.schema_store.list_definitions(),
			self.schema_store.all_options(),
			state.selection,
			state.query,
		)

	def sidebar_definitions(self) -> List[CategoryDefinition]:
		return [d for d in self.schema_store.list_definitions() if d.id not in SIDEBAR_EXCLUDED_IDS]

	def get_comic(self, comic_id: str) -> Optional[Comic]:
		return self.record_store.get(comic_id)

	# --- administration ---

	def login(self, secret: str) -> bool:
		return self.gate.check(secret)

	def update_site_config(self, **changes) -> SiteConfig:
		self.site_config = replace(self.site_config, **changes)
		self.persistence.save_site_config(self.site_config)
		logger.info(f"[Catalog] Site config updated: {sorted(changes)}")
		return self.site_config

	def reset(self):
		"""Restore built-in comics, schema and branding, and clear every persisted slot."""
		self.persistence.reset()
		self.record_store.replace(self.persistence.default_comics())
		self.schema_store.replace(default_category_definitions(), default_category_options())
		self.site_config = default_site_config()
		self.schema_editor.reset_active_category()
		logger.info("[Catalog] Reset to built-in data")
