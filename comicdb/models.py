"""
Data models for the Comic Catalog.
Defines the core data structures shared by the stores, the filter engine and the UI.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Dict, List, Optional  # mappings, lists and optional values


# Selection arity values for a category definition
SINGLE = 'single'  # one option per comic (e.g., company)
MULTIPLE = 'multiple'  # many options per comic (e.g., genres)
SELECTION_ARITIES = (SINGLE, MULTIPLE)


@dataclass
class CategoryDefinition:
	"""
	Describes one filterable category.
	System categories map onto fixed Comic fields; custom ones live in Comic.custom_values.
	"""
	id: str  # internal key, e.g. 'companies' or 'mood_4821'
	label: str  # display name, e.g. 'Company'
	is_system: bool  # True when bound to a known Comic field
	selection_arity: str = MULTIPLE  # 'single' or 'multiple'


@dataclass
class TargetDemographic:
	"""Intended readership of a title."""
	gender: str = ''  # e.g. 'Male', 'Female', 'ALL'
	age_ranges: List[str] = field(default_factory=list)  # e.g. ["10's", "20's"]


@dataclass
class Comic:
	"""
	Represents a single comic title and everything the catalog shows about it.
	System category values sit in dedicated fields; custom category values sit in custom_values.
	"""
	id: str  # unique, stable identifier
	title: str  # display title
	description: str = ''  # short synopsis
	image_url: str = ''  # http(s) URL or data URI
	countries: List[str] = field(default_factory=list)  # markets the title is licensed in
	company: str = ''  # rights holder, one of the 'companies' options
	genre: List[str] = field(default_factory=list)  # overlaps the 'genres' options
	age: str = ''  # age rating
	status: str = ''  # Ongoing / Completed / Planned
	original_title: Optional[str] = None  # title in the original language
	format: Optional[str] = None  # may be composite, e.g. "Webcomic / Paperback"
	distribution_type: Optional[str] = None  # Digital / Printed / All
	target_demographic: Optional[TargetDemographic] = None  # gender + age ranges
	authors: Optional[str] = None  # writing / drawing credits
	start_year: Optional[str] = None  # first publication year
	platform: Optional[str] = None  # serialization platform
	promotional_link: Optional[str] = None  # link to the title page
	custom_values: Dict[str, List[str]] = field(default_factory=dict)  # custom category id -> selected options


@dataclass
class SiteConfig:
	"""Branding shown in the catalog header."""
	main_title: str = 'KOCCA'
	sub_title: str = 'Frankfurt Book Fair'
	logo_text: str = 'K'
	logo_image_url: str = ''  # optional data URI; text logo is used when empty
