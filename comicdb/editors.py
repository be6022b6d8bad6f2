"""
Admin-side mutators.
SchemaEditor edits categories and their options; RecordEditor edits comics.
Both save the slots they touched after every successful mutation.
"""

import copy  # drafts are detached copies of stored comics
import time  # time-based ids for new comics
import uuid  # uniqueness tokens for comic ids
from datetime import date
from typing import Callable, Iterable, List, Optional, Set

from loguru import logger

from .images import to_data_uri
from .models import CategoryDefinition, Comic, TargetDemographic, MULTIPLE
from .record_store import RecordStore
from .schema_store import SchemaStore

PLACEHOLDER_IMAGE_URL = 'https://picsum.photos/300/400'


def _random_token() -> str:
	return uuid.uuid4().hex[:6]


def toggle_value(values: Iterable[str], item: str) -> List[str]:
	"""Add the item if absent, remove it if present. Order of the rest is kept."""
	values = list(values or [])
	if item in values:
		return [value for value in values if value != item]
	return values + [item]


def choices_with_current(options: Iterable[str], current: Iterable[str]) -> List[str]:
	"""
	Options for an edit widget. Values the comic holds but the schema no longer
	lists come first, so re-saving a comic never drops them.
	"""
	options = list(options or [])
	stale = [value for value in (current or []) if value and value not in options]
	return stale + options


class SchemaEditor:
	"""
	Category management for the admin view.
	Tracks which category is currently open for option editing.
	"""

	def __init__(self, schema_store: SchemaStore, persistence=None):
		self.schema_store = schema_store
		self.persistence = persistence  # CatalogPersistence, or None for unsaved edits
		self.active_category_id: str = self._first_category_id()

	def _first_category_id(self) -> str:
		definitions = self.schema_store.list_definitions()
		return definitions[0].id if definitions else ''

	def _save(self, definitions: bool = False, options: bool = False):
		if self.persistence is None:
			return
		if definitions:
			self.persistence.save_definitions(self.schema_store.list_definitions())
		if options:
			self.persistence.save_options(self.schema_store.all_options())

	def reset_active_category(self):
		self.active_category_id = self._first_category_id()

	def select_category(self, category_id: str):
		"""Raises CategoryNotFoundError for ids the schema does not define."""
		self.active_category_id = self.schema_store.require_definition(category_id).id

	def add_category(self, label: str, arity: str = MULTIPLE) -> CategoryDefinition:
		definition = self.schema_store.add_definition(label, arity)
		self.active_category_id = definition.id
		self._save(definitions=True, options=True)
		return definition

	def rename_category(self, category_id: str, new_label: str):
		self.schema_store.rename_definition(category_id, new_label)
		self._save(definitions=True)

	def delete_category(self, category_id: str):
		"""Raises ProtectedCategoryError for system categories."""
		self.schema_store.remove_definition(category_id)
		if self.active_category_id == category_id:
			self.active_category_id = self._first_category_id()
		self._save(definitions=True, options=True)

	def add_option(self, value: str, category_id: Optional[str] = None):
		"""Raises DuplicateOptionError when the value already exists."""
		self.schema_store.add_option(category_id or self.active_category_id, value)
		self._save(options=True)

	def remove_option(self, value: str, category_id: Optional[str] = None):
		self.schema_store.remove_option(category_id or self.active_category_id, value)
		self._save(options=True)


class RecordEditor:
	"""Comic editing for the admin view: drafts, saving, deletion."""

	def __init__(
		self,
		record_store: RecordStore,
		schema_store: SchemaStore,
		persistence=None,
		token_factory: Callable[[], str] = _random_token,
	):
		self.record_store = record_store
		self.schema_store = schema_store  # only used to prefill new drafts
		self.persistence = persistence
		self._token_factory = token_factory
		self._issued_ids: Set[str] = set()  # draft ids handed out, saved or not

	def _save(self):
		if self.persistence is not None:
			self.persistence.save_comics(self.record_store.list())

	def _first_option(self, category_id: str, fallback: str) -> str:
		options = self.schema_store.get_options(category_id)
		return options[0] if options else fallback

	def _allocate_id(self) -> str:
		"""Millisecond timestamp plus a token, retried until no stored comic or earlier draft uses it."""
		comic_id = f"{int(time.time() * 1000)}_{self._token_factory()}"
		while comic_id in self._issued_ids or self.record_store.get(comic_id) is not None:
			comic_id = f"{int(time.time() * 1000)}_{self._token_factory()}"
		self._issued_ids.add(comic_id)
		return comic_id

	def new_comic(self) -> Comic:
		"""Blank draft with each single-choice system field set to its first option."""
		return Comic(
			id=self._allocate_id(),
			title='',
			description='',
			image_url=PLACEHOLDER_IMAGE_URL,
			countries=['Global'],
			company=self._first_option('companies', ''),
			genre=[],
			age=self._first_option('ages', 'All'),
			status=self._first_option('statuses', 'Ongoing'),
			format=self._first_option('formats', 'Webcomic'),
			distribution_type=self._first_option('distributions', 'Digital'),
			target_demographic=TargetDemographic(gender=self._first_option('genders', 'ALL'), age_ranges=[]),
			authors='',
			platform='',
			start_year=str(date.today().year),
			custom_values={},
		)

	def edit(self, comic_id: str) -> Optional[Comic]:
		"""Detached copy of a stored comic, safe to modify before save()."""
		comic = self.record_store.get(comic_id)
		return copy.deepcopy(comic) if comic is not None else None

	def save(self, comic: Comic):
		if not (comic.title or '').strip():
			raise ValueError("A comic needs a title before it can be saved")
		self.record_store.upsert(comic)
		self._save()

	def delete(self, comic_id: str):
		self.record_store.remove(comic_id)
		self._save()

	def set_custom_values(self, comic: Comic, category_id: str, values: Iterable[str]) -> Comic:
		comic.custom_values[category_id] = list(values)
		return comic

	def toggle_custom_value(self, comic: Comic, category_id: str, item: str) -> Comic:
		current = comic.custom_values.get(category_id, [])
		return self.set_custom_values(comic, category_id, toggle_value(current, item))

	def set_demographic(self, comic: Comic, gender: Optional[str] = None, age_ranges: Optional[Iterable[str]] = None) -> Comic:
		demographic = comic.target_demographic or TargetDemographic(gender='ALL', age_ranges=[])
		if gender is not None:
			demographic.gender = gender
		if age_ranges is not None:
			demographic.age_ranges = list(age_ranges)
		comic.target_demographic = demographic
		return comic

	def attach_image(self, comic: Comic, data: bytes, mime_type: Optional[str] = None, filename: Optional[str] = None) -> Comic:
		comic.image_url = to_data_uri(data, mime_type=mime_type, filename=filename)
		logger.debug(f"[RecordEditor] Attached {len(data)} byte image to draft '{comic.id}'")
		return comic
