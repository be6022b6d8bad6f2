"""
Unit tests for the persistence layer: slot round trips, fallback on malformed state, reset.
Run: python tests/test_persistence.py
"""

import json
import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from comicdb.defaults import default_category_definitions, default_category_options, default_site_config
from comicdb.errors import MalformedPersistedStateError
from comicdb.kv_store import JsonFileKeyValueStore, MemoryKeyValueStore
from comicdb.models import CategoryDefinition, Comic, SiteConfig, TargetDemographic
from comicdb.persistence import (
    ALL_SLOTS,
    CatalogPersistence,
    SLOT_CATEGORY_DEFINITIONS,
    SLOT_CATEGORY_OPTIONS,
    SLOT_COMICS,
    SLOT_SITE_CONFIG,
)

SEED = ROOT / 'data' / 'comics.jsonl'


def build(initial=None):
    kv = MemoryKeyValueStore(initial)
    return kv, CatalogPersistence(kv, str(SEED))


def test_empty_store_loads_defaults():
    _, persistence = build()
    assert persistence.load_definitions() == default_category_definitions()
    assert persistence.load_options() == default_category_options()
    assert persistence.load_site_config() == default_site_config()
    comics = persistence.load_comics()
    assert len(comics) == 19
    assert comics[0].id == 'yl-1'


def test_missing_seed_gives_empty_collection():
    persistence = CatalogPersistence(MemoryKeyValueStore(), str(ROOT / 'data' / 'missing.jsonl'))
    assert persistence.load_comics() == []


def test_saved_state_is_loaded_back():
    kv, persistence = build()
    comic = Comic(
        id='x',
        title='X',
        genre=['Drama'],
        target_demographic=TargetDemographic('Female', ["30's"]),
        custom_values={'mood_1': ['Dark']},
    )
    definitions = default_category_definitions() + [CategoryDefinition('mood_1', 'Mood', False)]
    options = dict(default_category_options(), mood_1=['Dark'])
    config = SiteConfig(main_title='Catalog', sub_title='Fair', logo_text='C')

    persistence.save_comics([comic])
    persistence.save_definitions(definitions)
    persistence.save_options(options)
    persistence.save_site_config(config)

    assert persistence.load_comics() == [comic]
    assert persistence.load_definitions() == definitions
    assert persistence.load_options() == options
    assert persistence.load_site_config() == config
    assert 'format' not in json.loads(kv.get(SLOT_COMICS))[0]  # unset optional fields are dropped


def test_malformed_slots_fall_back_per_slot():
    kv, persistence = build({
        SLOT_COMICS: '{not json',
        SLOT_CATEGORY_DEFINITIONS: json.dumps([{'id': 'a', 'label': 'A'}, {'id': 'a', 'label': 'B'}]),
        SLOT_CATEGORY_OPTIONS: json.dumps({'genres': 'Drama'}),
        SLOT_SITE_CONFIG: json.dumps({'mainTitle': 'Only a title'}),
    })
    assert len(persistence.load_comics()) == 19
    assert persistence.load_definitions() == default_category_definitions()
    assert persistence.load_options() == default_category_options()
    assert persistence.load_site_config() == default_site_config()


def test_comic_entries_without_id_are_malformed():
    _, persistence = build({SLOT_COMICS: json.dumps([{'title': 'No id'}])})
    assert len(persistence.load_comics()) == 19
    try:
        persistence._parse_comics(SLOT_COMICS, [{'title': 'No id'}])
    except MalformedPersistedStateError as e:
        assert e.slot == SLOT_COMICS
    else:
        raise AssertionError("missing id should be malformed")


def test_camel_case_exports_are_accepted():
    _, persistence = build({
        SLOT_CATEGORY_DEFINITIONS: json.dumps([{'id': 'moods_1234', 'label': 'Mood', 'isSystem': False, 'type': 'single'}]),
        SLOT_SITE_CONFIG: json.dumps({'mainTitle': 'M', 'subTitle': 'S', 'logoText': 'L', 'logoImageUrl': None}),
        SLOT_COMICS: json.dumps([{
            'id': '1',
            'title': 'T',
            'originalTitle': 'O',
            'distributionType': 'Digital',
            'targetDemographic': {'gender': 'ALL', 'ageRanges': ["10's"]},
            'customValues': {'moods_1234': ['Dark']},
        }]),
    })
    definition = persistence.load_definitions()[0]
    assert (definition.id, definition.is_system, definition.selection_arity) == ('moods_1234', False, 'single')
    assert persistence.load_site_config() == SiteConfig('M', 'S', 'L', '')
    comic = persistence.load_comics()[0]
    assert comic.original_title == 'O'
    assert comic.distribution_type == 'Digital'
    assert comic.target_demographic.age_ranges == ["10's"]
    assert comic.custom_values == {'moods_1234': ['Dark']}


def test_reset_clears_every_slot():
    kv, persistence = build()
    persistence.save_comics([])
    persistence.save_definitions([])
    persistence.save_options({})
    persistence.save_site_config(SiteConfig())
    persistence.reset()
    for slot in ALL_SLOTS:
        assert slot not in kv
    assert len(persistence.load_comics()) == 19


def test_json_file_backend():
    with tempfile.TemporaryDirectory() as tmp:
        kv = JsonFileKeyValueStore(str(Path(tmp) / 'store'))
        assert kv.get('slot') is None
        kv.set('slot', '{"a": 1}')
        assert kv.get('slot') == '{"a": 1}'
        assert 'slot' in kv
        kv.delete('slot')
        kv.delete('slot')
        assert kv.get('slot') is None


def test_undecodable_slot_file_falls_back():
    with tempfile.TemporaryDirectory() as tmp:
        kv = JsonFileKeyValueStore(tmp)
        persistence = CatalogPersistence(kv, str(SEED))
        persistence.save_options({'genres': ['Drama']})
        (Path(tmp) / f"{SLOT_CATEGORY_DEFINITIONS}.json").write_bytes(b'[\xff\xfe]')
        assert persistence.load_definitions() == default_category_definitions()
        assert persistence.load_options() == {'genres': ['Drama']}  # other slots unaffected
        try:
            persistence._read(SLOT_CATEGORY_DEFINITIONS)
        except MalformedPersistedStateError as e:
            assert e.slot == SLOT_CATEGORY_DEFINITIONS
        else:
            raise AssertionError("undecodable bytes should be malformed")


def main():
    print("Running persistence tests...")
    for name, fn in sorted(globals().items()):
        if name.startswith('test_') and callable(fn):
            fn()
            print(f" - {name} ok")
    print("All persistence tests passed!")


if __name__ == '__main__':
    main()
