import pytest

from modlinker.Utils.collection import ModEntry, OrderedCollection, PluginEntry


def _names(coll):
    return [e.name for e in coll]


def test_priority_is_index():
    coll = OrderedCollection([PluginEntry("A.esp"), PluginEntry("B.esp"),
                              PluginEntry("C.esp")])
    assert coll.index_of("A.esp") == 0
    assert coll.index_of("c.ESP") == 2
    with pytest.raises(KeyError):
        coll.index_of("Missing.esp")


def test_replace_keeps_first_duplicate():
    coll = OrderedCollection()
    coll.replace([ModEntry("Foo", True), ModEntry("foo", False), ModEntry("Bar")])
    assert _names(coll) == ["Foo", "Bar"]
    assert coll.get("FOO").is_active is True


def test_replace_clears_previous_contents():
    coll = OrderedCollection([ModEntry("Old")])
    coll.replace([ModEntry("New")])
    assert _names(coll) == ["New"]
    assert "Old" not in coll


def test_move_renumbers_and_clamps():
    coll = OrderedCollection([ModEntry(n) for n in "ABCD"])
    assert coll.move("D", 1) == 1
    assert _names(coll) == ["A", "D", "B", "C"]
    assert coll.move("a", 99) == 3
    assert _names(coll) == ["D", "B", "C", "A"]
    assert coll.move("C", -5) == 0
    assert _names(coll) == ["C", "D", "B", "A"]


def test_set_active_and_active_list():
    coll = OrderedCollection([ModEntry("A"), ModEntry("B", True), ModEntry("C")])
    assert coll.set_active("C", True) is True
    assert coll.set_active("C", True) is False
    assert _names(coll.active()) == ["B", "C"]


def test_one_event_per_mutation():
    coll = OrderedCollection([ModEntry(n) for n in "ABC"])
    events = []
    coll.add_listener(events.append)
    coll.move("C", 0)
    coll.set_active("A", True)
    coll.replace([ModEntry("X")])
    assert len(events) == 3
    assert all(e is coll for e in events)

    coll.remove_listener(events.append)
    coll.set_active("X", True)
    assert len(events) == 3


def test_no_event_when_nothing_changes():
    coll = OrderedCollection([ModEntry("A")])
    events = []
    coll.add_listener(events.append)
    coll.move("A", 0)
    coll.set_active("A", False)
    assert events == []
