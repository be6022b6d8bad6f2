"""
Data loading and serialization module.
Handles loading comics from JSONL and converting between raw dictionaries and Comic objects.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read JSON lines
from dataclasses import asdict  # dataclass -> dict for serialization
from typing import Any, Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Comic data classes used across the project
from .models import Comic, TargetDemographic  # structured comic record

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and preprocessing of comic data.
	"""

	# Alternative key spellings accepted on input: exported/camelCase name -> field name
	FIELD_ALIASES = {
		'originalTitle': 'original_title',
		'imageUrl': 'image_url',
		'distributionType': 'distribution_type',
		'targetDemographic': 'target_demographic',
		'startYear': 'start_year',
		'promotionalLink': 'promotional_link',
		'customValues': 'custom_values',
		'ageRanges': 'age_ranges',
	}

	def __init__(self):
		"""Initialize the data loader and expose the alias mapping."""
		self.field_aliases = self.FIELD_ALIASES  # store mapping for reuse

	def load_comics_from_jsonl(self, filepath: str) -> List[Comic]:
		"""
		Load comics from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns a list of Comic objects in file order.
		"""
		comics = []  # accumulator for parsed Comic objects
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Comic data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading comics from {filepath}...")  # log action

		# Open the file and read line-by-line
		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					data = json.loads(line.strip())  # parse JSON object per line
					comics.append(self.parse_comic(data))  # convert dict -> Comic
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
					continue  # move on
				except (TypeError, ValueError) as e:
					logger.warning(f"[DataLoader] Error parsing comic at line {line_num}: {e}")  # unexpected shape
					continue  # move on

		logger.info(f"[DataLoader] Successfully loaded {len(comics)} comics.")  # summary
		return comics  # return list

	def parse_comic(self, data: Dict[str, Any]) -> Comic:
		"""
		Convert a raw dictionary (from file or storage) into a Comic object.
		Accepts both field names and camelCase aliases; missing fields get safe defaults.
		"""
		if not isinstance(data, dict):
			raise TypeError(f"Comic entry must be an object, got {type(data).__name__}")
		data = self._apply_aliases(data)  # camelCase -> snake_case

		comic_id = str(data.get('id') or '').strip()  # ids are always strings
		if not comic_id:
			raise ValueError("Comic entry has no id")

		# Parse fields that may arrive as comma-separated strings or lists
		countries = self._parse_comma_separated(data.get('countries'))
		genre = self._parse_comma_separated(data.get('genre'))

		# Custom values: category id -> list of options
		raw_custom = data.get('custom_values') or {}
		if not isinstance(raw_custom, dict):
			raise TypeError("custom_values must be an object")
		custom_values = {}
		for category_id, values in raw_custom.items():
			custom_values[str(category_id)] = self._parse_comma_separated(values)

		return Comic(
			id=comic_id,
			title=self._clean_text(data.get('title')),
			description=self._clean_text(data.get('description')),
			image_url=self._clean_text(data.get('image_url')),
			countries=countries,
			company=self._clean_text(data.get('company')),
			genre=genre,
			age=self._clean_text(data.get('age')),
			status=self._clean_text(data.get('status')),
			original_title=self._optional_text(data.get('original_title')),
			format=self._optional_text(data.get('format')),
			distribution_type=self._optional_text(data.get('distribution_type')),
			target_demographic=self._parse_demographic(data.get('target_demographic')),
			authors=self._optional_text(data.get('authors')),
			start_year=self._optional_text(data.get('start_year')),
			platform=self._optional_text(data.get('platform')),
			promotional_link=self._optional_text(data.get('promotional_link')),
			custom_values=custom_values,
		)

	def comic_to_dict(self, comic: Comic) -> Dict[str, Any]:
		"""Serialize a Comic into a plain JSON-compatible dict, dropping unset optional fields."""
		raw = asdict(comic)  # nested dataclasses become dicts too
		return {key: value for key, value in raw.items() if value is not None}

	def _apply_aliases(self, data: Dict[str, Any]) -> Dict[str, Any]:
		out = {}
		for key, value in data.items():
			out[self.field_aliases.get(key, key)] = value
		return out

	def _parse_demographic(self, value) -> Optional[TargetDemographic]:
		"""Build a TargetDemographic from a dict; anything else means 'not set'."""
		if not isinstance(value, dict):
			return None
		value = self._apply_aliases(value)
		return TargetDemographic(
			gender=self._clean_text(value.get('gender')),
			age_ranges=self._parse_comma_separated(value.get('age_ranges')),
		)

	def _parse_comma_separated(self, value) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings.
		"""
		if value is None:  # missing field
			return []  # treat as empty list
		if isinstance(value, (list, tuple, set)):  # already a collection
			return [str(item).strip() for item in value if item]  # clean each
		if isinstance(value, str):  # comma-separated string
			return [item.strip() for item in value.split(',') if item.strip()]  # split/trim
		return []  # any other type becomes empty

	def _clean_text(self, text) -> str:
		"""Trim whitespace; None becomes an empty string. Case is preserved for display."""
		if text is None:
			return ''
		return str(text).strip()

	def _optional_text(self, text) -> Optional[str]:
		cleaned = self._clean_text(text)
		return cleaned or None

	def get_all_countries(self, comics: List[Comic]) -> List[str]:
		"""Return a sorted list of all unique countries in the dataset."""
		countries = set()  # collect unique countries
		for comic in comics:  # iterate dataset
			countries.update(comic.countries)
		return sorted(countries)  # sorted for stable display

	def get_all_companies(self, comics: List[Comic]) -> List[str]:
		"""Return a sorted list of all unique companies in the dataset."""
		return sorted({comic.company for comic in comics if comic.company})

	def get_all_genres(self, comics: List[Comic]) -> List[str]:
		"""Return a sorted list of all unique genres in the dataset."""
		genres = set()  # unique genres
		for comic in comics:  # iterate
			genres.update(comic.genre)
		return sorted(genres)  # sorted output
