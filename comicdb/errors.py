"""
Exceptions raised by the catalog stores and the persistence layer.
"""


class CatalogError(Exception):
	"""Base class for every catalog error."""


class DuplicateOptionError(CatalogError):
	"""Adding an option value that already exists in a category."""

	def __init__(self, category_id: str, value: str):
		self.category_id = category_id
		self.value = value
		super().__init__(f"Option '{value}' already exists in category '{category_id}'")


class ProtectedCategoryError(CatalogError):
	"""Attempting to delete a system category definition."""

	def __init__(self, category_id: str):
		self.category_id = category_id
		super().__init__(f"System category '{category_id}' cannot be deleted")


class CategoryNotFoundError(CatalogError):
	"""
	Referencing a category id absent from the schema.
	The filter engine never raises this; it is for callers that want strict lookups.
	"""

	def __init__(self, category_id: str):
		self.category_id = category_id
		super().__init__(f"Unknown category '{category_id}'")


class MalformedPersistedStateError(CatalogError):
	"""A persisted slot could not be parsed or validated."""

	def __init__(self, slot: str, reason: str):
		self.slot = slot
		self.reason = reason
		super().__init__(f"Persisted slot '{slot}' is malformed: {reason}")
