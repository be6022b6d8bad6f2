"""
Test script for data loading
Verifies that the built-in comics load and that raw entries are normalized.
Run: python tests/test_data_loader.py
"""

import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from comicdb.data_loader import DataLoader


def test_data_loading():
    """Test loading comics from the JSONL seed file."""
    loader = DataLoader()
    comics = loader.load_comics_from_jsonl(str(ROOT / 'data' / 'comics.jsonl'))

    assert len(comics) == 19
    first = comics[0]
    assert first.id == 'yl-1'
    assert first.title == 'Terror Man'
    assert first.format == 'Webcomic / Paperback'
    assert first.target_demographic.gender == 'ALL'
    assert len({c.id for c in comics}) == len(comics)  # ids are unique

    assert 'YLAB EARTH' in loader.get_all_companies(comics)
    assert 'Thriller' in loader.get_all_genres(comics)
    assert 'Global' in loader.get_all_countries(comics)


def test_parse_normalizes_raw_entries():
    loader = DataLoader()
    comic = loader.parse_comic({
        'id': 7,
        'title': '  Spaced  ',
        'genre': 'Drama, Thriller',
        'countries': None,
        'format': '',
        'imageUrl': 'data:image/png;base64,AA==',
        'customValues': {'mood_1': 'Dark'},
    })
    assert comic.id == '7'
    assert comic.title == 'Spaced'
    assert comic.genre == ['Drama', 'Thriller']
    assert comic.countries == []
    assert comic.format is None
    assert comic.image_url == 'data:image/png;base64,AA=='
    assert comic.custom_values == {'mood_1': ['Dark']}
    assert comic.target_demographic is None


def test_bad_lines_are_skipped():
    loader = DataLoader()
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'comics.jsonl'
        path.write_text('{"id": "a", "title": "A"}\n{oops\n\n{"title": "no id"}\n[1, 2]\n', encoding='utf-8')
        comics = loader.load_comics_from_jsonl(str(path))
    assert [c.id for c in comics] == ['a']


def test_missing_file_raises():
    loader = DataLoader()
    try:
        loader.load_comics_from_jsonl(str(ROOT / 'data' / 'nope.jsonl'))
    except FileNotFoundError:
        return
    raise AssertionError("missing file should raise FileNotFoundError")


if __name__ == '__main__':
    test_data_loading()
    test_parse_normalizes_raw_entries()
    test_bad_lines_are_skipped()
    test_missing_file_raises()
    print("Data loading tests passed!")
