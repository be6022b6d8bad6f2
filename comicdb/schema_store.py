"""
Schema store module.
Holds the category definitions and the option list of every category.
"""

import re  # label normalization for generated ids
import uuid  # uniqueness tokens for custom category ids
from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from .errors import CategoryNotFoundError, DuplicateOptionError, ProtectedCategoryError
from .models import CategoryDefinition, MULTIPLE, SELECTION_ARITIES


def _random_token() -> str:
	return uuid.uuid4().hex[:6]


class SchemaStore:
	"""
	Category definitions (ordered) plus category id -> ordered option list.
	Pure CRUD: nothing here knows about comics.
	"""

	def __init__(
		self,
		definitions: Optional[Iterable[CategoryDefinition]] = None,
		options: Optional[Dict[str, List[str]]] = None,
		token_factory: Callable[[], str] = _random_token,
	):
		self._definitions: List[CategoryDefinition] = []
		self._options: Dict[str, List[str]] = {}
		self._token_factory = token_factory  # produces the suffix of generated ids
		self.replace(definitions or [], options or {})

	def replace(self, definitions: Iterable[CategoryDefinition], options: Dict[str, List[str]]):
		"""Swap in a whole schema, e.g. after loading or resetting persisted state."""
		self._definitions = list(definitions)
		self._options = {category_id: list(values) for category_id, values in options.items()}
		logger.debug(f"[SchemaStore] Schema replaced | definitions={len(self._definitions)} option_lists={len(self._options)}")

	# --- reads ---

	def list_definitions(self) -> List[CategoryDefinition]:
		return list(self._definitions)

	def get_definition(self, category_id: str) -> Optional[CategoryDefinition]:
		for definition in self._definitions:
			if definition.id == category_id:
				return definition
		return None

	def require_definition(self, category_id: str) -> CategoryDefinition:
		definition = self.get_definition(category_id)
		if definition is None:
			raise CategoryNotFoundError(category_id)
		return definition

	def get_options(self, category_id: str) -> List[str]:
		"""Options in display order; unknown ids give an empty list."""
		return list(self._options.get(category_id, []))

	def all_options(self) -> Dict[str, List[str]]:
		return {category_id: list(values) for category_id, values in self._options.items()}

	# --- definition edits ---

	def add_definition(self, label: str, arity: str = MULTIPLE) -> CategoryDefinition:
		"""
		Create a custom category with a freshly allocated id and an empty option list.
		The id is the normalized label plus a token, retried until it matches no existing id.
		"""
		label = (label or '').strip()
		if not label:
			raise ValueError("Category label cannot be empty")
		if arity not in SELECTION_ARITIES:
			raise ValueError(f"Unknown selection arity: {arity}")

		prefix = re.sub(r'\s+', '', label.lower())
		taken = {definition.id for definition in self._definitions} | set(self._options)
		category_id = f"{prefix}_{self._token_factory()}"
		while category_id in taken:
			category_id = f"{prefix}_{self._token_factory()}"

		definition = CategoryDefinition(id=category_id, label=label, is_system=False, selection_arity=arity)
		self._definitions.append(definition)
		self._options[category_id] = []
		logger.info(f"[SchemaStore] Added category '{label}' as '{category_id}'")
		return definition

	def rename_definition(self, category_id: str, new_label: str):
		"""Change a label. Unknown ids and blank labels are ignored."""
		new_label = (new_label or '').strip()
		definition = self.get_definition(category_id)
		if definition is None or not new_label:
			logger.debug(f"[SchemaStore] Rename ignored | id={category_id} label='{new_label}'")
			return
		definition.label = new_label
		logger.info(f"[SchemaStore] Renamed '{category_id}' -> '{new_label}'")

	def remove_definition(self, category_id: str):
		"""
		Delete a custom category and discard its options.
		Comics keep any custom values stored under the id.
		"""
		definition = self.get_definition(category_id)
		if definition is None:
			return
		if definition.is_system:
			raise ProtectedCategoryError(category_id)
		self._definitions = [d for d in self._definitions if d.id != category_id]
		self._options.pop(category_id, None)
		logger.info(f"[SchemaStore] Removed category '{category_id}'")

	# --- option edits ---

	def add_option(self, category_id: str, value: str):
		"""Append an option. Exact (case-sensitive) duplicates are rejected."""
		value = (value or '').strip()
		if not value:
			return
		values = self._options.setdefault(category_id, [])
		if value in values:
			raise DuplicateOptionError(category_id, value)
		values.append(value)
		logger.info(f"[SchemaStore] Added option '{value}' to '{category_id}'")

	def remove_option(self, category_id: str, value: str):
		values = self._options.get(category_id)
		if values and value in values:
			values.remove(value)
			logger.info(f"[SchemaStore] Removed option '{value}' from '{category_id}'")
