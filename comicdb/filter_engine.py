"""
Filter engine module.
Computes the visible subset of comics for a search query and a category selection.

Semantics:
- the title query is a case-insensitive substring match on title or original title
- categories combine with AND; the options selected within one category combine with OR
- a selection naming a category the schema no longer defines is ignored

This is a linear scan over the collection (records x active categories x selected options),
which is fine for small and medium catalogs. There is no index and no query planning.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from .models import CategoryDefinition, Comic


def _demographic_gender(comic: Comic) -> Optional[str]:
	demographic = comic.target_demographic
	return demographic.gender if demographic else None


def _demographic_age_ranges(comic: Comic) -> Optional[List[str]]:
	demographic = comic.target_demographic
	return demographic.age_ranges if demographic else None


# System category id -> accessor for the Comic field it filters on.
# System ids missing from this table contribute no constraint.
SYSTEM_FIELD_ACCESSORS: Dict[str, Callable[[Comic], Any]] = {
	'companies': lambda comic: comic.company,
	'genres': lambda comic: comic.genre,
	'ages': lambda comic: comic.age,
	'statuses': lambda comic: comic.status,
	'formats': lambda comic: comic.format,
	'distributions': lambda comic: comic.distribution_type,
	'genders': _demographic_gender,
	'targetAges': _demographic_age_ranges,
}

# Categories whose scalar value is a composite display string ("Webcomic / Paperback")
SUBSTRING_MATCH_CATEGORIES = frozenset({'formats'})


def active_selection(selection: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
	"""Drop categories with nothing selected; keep the rest as lists."""
	active = {}
	for category_id, selected in (selection or {}).items():
		selected = list(selected or [])
		if selected:
			active[category_id] = selected
	return active


def matches_query(comic: Comic, query: str) -> bool:
	"""Case-insensitive substring test against title and original title."""
	if not query:
		return True
	needle = query.casefold()
	if needle in (comic.title or '').casefold():
		return True
	return bool(comic.original_title) and needle in comic.original_title.casefold()


def matches_value(category_id: str, value: Any, selected: Sequence[str]) -> bool:
	"""
	Apply the match rule for one system category.
	List values need at least one common element; 'formats' needs a selected option
	contained in the value; other scalars need exact membership. Missing values never match.
	"""
	if value is None:
		return False
	if isinstance(value, (list, tuple, set, frozenset)):
		return any(item in selected for item in value)
	if not value:
		return False
	if category_id in SUBSTRING_MATCH_CATEGORIES:
		return any(option in value for option in selected)
	return value in selected


def matches_category(comic: Comic, definition: CategoryDefinition, selected: Sequence[str]) -> bool:
	"""True when the comic satisfies one active category constraint."""
	if not definition.is_system:
		custom = comic.custom_values.get(definition.id) or []
		return any(item in selected for item in custom)

	accessor = SYSTEM_FIELD_ACCESSORS.get(definition.id)
	if accessor is None:  # unmapped system id: no constraint
		return True
	return matches_value(definition.id, accessor(comic), selected)


def evaluate(
	records: Iterable[Comic],
	definitions: Iterable[CategoryDefinition],
	options: Optional[Mapping[str, Sequence[str]]],
	selection: Optional[Mapping[str, Iterable[str]]],
	query: str = '',
) -> List[Comic]:
	"""
	Return the comics that pass the title query and every active category, in input order.
	`options` (the category option lists) is part of the call so callers can pass the whole
	schema; matching only uses the selected options themselves.
	"""
	by_id = {definition.id: definition for definition in definitions}
	active = active_selection(selection or {})

	# Resolve constraints once; selections for vanished categories fall away here
	constraints = []
	for category_id, selected in active.items():
		definition = by_id.get(category_id)
		if definition is None:
			logger.debug(f"[Filter] Ignoring selection for unknown category '{category_id}'")
			continue
		constraints.append((definition, selected))

	query = query or ''
	kept: List[Comic] = []
	for comic in records:
		if not matches_query(comic, query):
			continue
		rejected_by = None
		for definition, selected in constraints:
			if not matches_category(comic, definition, selected):
				rejected_by = definition
				break
		if rejected_by is not None:
			logger.debug(
				f"[Filter] Filtered out | comic={comic.title} ({comic.id}) | category={rejected_by.id} | required_any={selected[:5]}"
			)
			continue
		kept.append(comic)

	logger.debug(f"[Filter] Kept {len(kept)} comics | query='{query}' | active={list(active)}")
	return kept
