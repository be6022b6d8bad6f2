"""
Unit tests for SchemaStore: id allocation, protected system categories, option lists.
Run: python tests/test_schema_store.py
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from comicdb.defaults import default_category_definitions, default_category_options
from comicdb.editors import SchemaEditor
from comicdb.errors import CategoryNotFoundError, DuplicateOptionError, ProtectedCategoryError
from comicdb.models import SINGLE
from comicdb.schema_store import SchemaStore

SYSTEM_IDS = ['companies', 'genres', 'statuses', 'formats', 'distributions', 'ages', 'targetAges', 'genders']


def build_store(**kwargs):
    return SchemaStore(default_category_definitions(), default_category_options(), **kwargs)


def test_defaults_are_system_categories():
    store = build_store()
    assert [d.id for d in store.list_definitions()] == SYSTEM_IDS
    assert all(d.is_system for d in store.list_definitions())


def test_get_options_unknown_id_is_empty():
    store = build_store()
    assert store.get_options('nope') == []
    assert store.get_options('statuses') == ["Ongoing", "Completed", "Planned"]


def test_add_definition_generates_prefixed_id():
    store = build_store(token_factory=lambda: '0001')
    definition = store.add_definition('Art Style')
    assert definition.id == 'artstyle_0001'
    assert definition.label == 'Art Style'
    assert definition.is_system is False
    assert store.get_options(definition.id) == []
    assert store.list_definitions()[-1] is definition


def test_add_definition_retries_on_collision():
    tokens = iter(['0001', '0001', '0002'])
    store = build_store(token_factory=lambda: next(tokens))
    first = store.add_definition('Mood')
    second = store.add_definition('Mood')
    assert first.id == 'mood_0001'
    assert second.id == 'mood_0002'


def test_add_definition_rejects_blank_label_and_bad_arity():
    store = build_store()
    with pytest.raises(ValueError):
        store.add_definition('   ')
    with pytest.raises(ValueError):
        store.add_definition('Mood', 'several')
    assert store.add_definition('Mood', SINGLE).selection_arity == SINGLE


def test_rename_definition():
    store = build_store()
    store.rename_definition('companies', 'Publisher')
    assert store.get_definition('companies').label == 'Publisher'
    store.rename_definition('missing', 'Whatever')  # tolerated
    store.rename_definition('companies', '  ')  # ignored
    assert store.get_definition('companies').label == 'Publisher'


def test_remove_system_definition_is_rejected():
    store = build_store()
    before = store.list_definitions()
    with pytest.raises(ProtectedCategoryError):
        store.remove_definition('companies')
    assert store.list_definitions() == before


def test_remove_custom_definition_discards_options():
    store = build_store()
    mood = store.add_definition('Mood')
    store.add_option(mood.id, 'Dark')
    store.remove_definition(mood.id)
    assert store.get_definition(mood.id) is None
    assert store.get_options(mood.id) == []
    store.remove_definition(mood.id)  # second delete is a no-op


def test_duplicate_option_is_rejected():
    store = build_store()
    before = store.get_options('genres')
    with pytest.raises(DuplicateOptionError):
        store.add_option('genres', 'Thriller')
    assert len(store.get_options('genres')) == len(before)


def test_options_keep_insertion_order_and_case():
    store = build_store()
    store.add_option('genres', 'thriller')  # different case is a different option
    store.add_option('genres', ' Horror ')
    assert store.get_options('genres')[-2:] == ['thriller', 'Horror']
    store.add_option('genres', '')  # blank ignored
    assert store.get_options('genres')[-1] == 'Horror'


def test_remove_option():
    store = build_store()
    store.remove_option('statuses', 'Planned')
    assert store.get_options('statuses') == ['Ongoing', 'Completed']
    store.remove_option('statuses', 'Planned')  # no-op
    store.remove_option('missing', 'x')  # no-op


def test_returned_lists_are_copies():
    store = build_store()
    store.get_options('ages').append('99+')
    store.list_definitions().clear()
    assert '99+' not in store.get_options('ages')
    assert len(store.list_definitions()) == len(SYSTEM_IDS)


def test_require_definition():
    store = build_store()
    assert store.require_definition('genres').label == 'Genre'
    with pytest.raises(CategoryNotFoundError):
        store.require_definition('missing')


def test_editor_select_category():
    editor = SchemaEditor(build_store())
    assert editor.active_category_id == 'companies'
    editor.select_category('ages')
    assert editor.active_category_id == 'ages'
    with pytest.raises(CategoryNotFoundError):
        editor.select_category('missing')
    assert editor.active_category_id == 'ages'


def main():
    print("Running SchemaStore tests...")
    for name, fn in sorted(globals().items()):
        if name.startswith('test_') and callable(fn):
            fn()
            print(f" - {name} ok")
    print("All SchemaStore tests passed!")


if __name__ == '__main__':
    main()
