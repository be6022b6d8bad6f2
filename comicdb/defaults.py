"""
Built-in schema and branding used when nothing has been persisted yet (or after a reset).
The built-in comics live in data/comics.jsonl and are read through DataLoader.
"""

from typing import Dict, List

from .models import CategoryDefinition, SiteConfig, SINGLE, MULTIPLE


COMPANIES = [
	"D&C MEDIA Co. Ltd.",
	"DAEWON C.I. INC.",
	"DCC ENT Co., Ltd",
	"RIVERSE INC.",
	"SEOUL MEDIA COMICS, INC",
	"C&C Revolution Inc.",
	"Haksan Publishing Co.",
	"Toyou's Dream Inc.",
	"YLAB EARTH",
]

GENRES = [
	"Action Fantasy",
	"Romance Fantasy",
	"Modern Romance",
	"BL/GL",
	"Thriller",
	"Drama",
	"Sports",
	"School Action",
	"Comedy",
]

AGES = ['All', '12+', '15+', '19+']


def default_category_definitions() -> List[CategoryDefinition]:
	"""System categories in display order. Fresh objects on every call."""
	return [
		CategoryDefinition('companies', 'Company', True, SINGLE),
		CategoryDefinition('genres', 'Genre', True, MULTIPLE),
		CategoryDefinition('statuses', 'Status', True, SINGLE),
		CategoryDefinition('formats', 'Format', True, SINGLE),
		CategoryDefinition('distributions', 'Distribution', True, SINGLE),
		CategoryDefinition('ages', 'Age Rating', True, SINGLE),
		# shown in the admin form and detail view, not in the sidebar
		CategoryDefinition('targetAges', 'Target Age', True, MULTIPLE),
		CategoryDefinition('genders', 'Target Gender', True, SINGLE),
	]


def default_category_options() -> Dict[str, List[str]]:
	"""Option lists for the system categories. Fresh lists on every call."""
	return {
		'companies': list(COMPANIES),
		'genres': list(GENRES),
		'ages': list(AGES),
		'targetAges': ["10's", "20's", "30's", "40's", "50's", "All Ages"],
		'formats': ["Webcomic", "Paperback", "E-Book", "Animation"],
		'distributions': ["Digital", "Printed", "All"],
		'statuses': ["Ongoing", "Completed", "Planned"],
		'genders': ["Male", "Female", "ALL"],
	}


def default_site_config() -> SiteConfig:
	return SiteConfig()
