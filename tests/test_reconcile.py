from modlinker.Utils.collection import ModEntry, OrderedCollection, PluginEntry
from modlinker.Utils.reconcile import merge_order, reconcile_mods, reconcile_plugins

from conftest import write_files


def _state(coll):
    return [(e.name, e.is_active) for e in coll]


# ---------------------------------------------------------------------------
# merge_order
# ---------------------------------------------------------------------------

def test_stale_entries_dropped():
    merged = merge_order([("Gone.esp", True), ("Here.esp", False)], ["Here.esp"])
    assert merged == [("Here.esp", False)]


def test_discovered_entries_appended_in_scan_order():
    merged = merge_order([("B.esp", True)], ["A.esp", "B.esp", "C.esp"])
    assert merged == [("B.esp", True), ("A.esp", False), ("C.esp", False)]


def test_order_file_casing_and_flag_win():
    merged = merge_order([("Foo.esp", True)], ["foo.esp"])
    assert merged == [("Foo.esp", True)]


def test_first_duplicate_in_order_file_wins():
    merged = merge_order([("Foo.esp", False), ("FOO.esp", True)], ["Foo.esp"])
    assert merged == [("Foo.esp", False)]


def test_reserved_names_excluded():
    merged = merge_order(
        [("Skyrim.esm", True), ("Mod.esp", True)],
        ["Skyrim.esm", "Update.esm", "Mod.esp"],
        reserved={"skyrim.esm", "update.esm"},
    )
    assert merged == [("Mod.esp", True)]


def test_blank_tokens_treated_as_missing():
    merged = merge_order([("", False), ("   ", True), ("A.esp", True)], ["A.esp"])
    assert merged == [("A.esp", True)]


# ---------------------------------------------------------------------------
# reconcile_plugins / reconcile_mods
# ---------------------------------------------------------------------------

def test_plugin_scenario_rewrites_order_file(tmp_path):
    data = tmp_path / "Data"
    write_files(data, {"ModA.esp": "", "ModB.esp": "", "ModC.esp": ""})
    order = tmp_path / "plugins.txt"
    order.write_text("ModA.esp\n*ModB.esp\n", encoding="utf-8")

    plugins = OrderedCollection()
    reconcile_plugins(plugins, order, data, tmp_path / "Mods", [])

    assert _state(plugins) == [("ModA.esp", False), ("ModB.esp", True), ("ModC.esp", False)]
    assert all(isinstance(p, PluginEntry) for p in plugins)
    assert order.read_text(encoding="utf-8") == "ModA.esp\n*ModB.esp\nModC.esp"


def test_plugin_reconcile_is_idempotent(tmp_path):
    data = tmp_path / "Data"
    write_files(data, {"B.esp": "", "A.esm": "", "C.esl": ""})
    order = tmp_path / "plugins.txt"
    order.write_text("*C.esl\nGone.esp\n", encoding="utf-8")

    plugins = OrderedCollection()
    reconcile_plugins(plugins, order, data, tmp_path / "Mods", [])
    first_state, first_text = _state(plugins), order.read_text(encoding="utf-8")
    reconcile_plugins(plugins, order, data, tmp_path / "Mods", [])

    assert _state(plugins) == first_state
    assert order.read_text(encoding="utf-8") == first_text == "*C.esl\nA.esm\nB.esp"


def test_only_active_mods_contribute_plugins(tmp_path):
    data = tmp_path / "Data"
    mods_root = tmp_path / "Mods"
    write_files(data, {"Base.esp": ""})
    write_files(mods_root, {"On/On.esp": "", "Off/Off.esp": ""})
    order = tmp_path / "plugins.txt"

    plugins = OrderedCollection()
    reconcile_plugins(plugins, order, data, mods_root, ["On"])
    assert [p.name for p in plugins] == ["Base.esp", "On.esp"]


def test_reserved_plugins_never_listed(tmp_path):
    data = tmp_path / "Data"
    write_files(data, {"Skyrim.esm": "", "Update.esm": "", "Mod.esp": ""})
    order = tmp_path / "plugins.txt"
    order.write_text("*Skyrim.esm\n*Update.esm\n*Mod.esp", encoding="utf-8")

    plugins = OrderedCollection()
    reconcile_plugins(plugins, order, data, tmp_path / "Mods", [],
                      reserved={"skyrim.esm", "update.esm"})
    assert _state(plugins) == [("Mod.esp", True)]
    assert order.read_text(encoding="utf-8") == "*Mod.esp"


def test_reconcile_mods(tmp_path):
    mods_root = tmp_path / "Mods"
    for name in ("Alpha", "Beta", "Gamma"):
        (mods_root / name).mkdir(parents=True)
    order = tmp_path / "mods.txt"
    order.write_text("*Gamma\nDeleted\nAlpha", encoding="utf-8")

    mods = OrderedCollection()
    reconcile_mods(mods, order, mods_root)

    assert _state(mods) == [("Gamma", True), ("Alpha", False), ("Beta", False)]
    assert all(isinstance(m, ModEntry) for m in mods)
    assert order.read_text(encoding="utf-8") == "*Gamma\nAlpha\nBeta"


def test_reconcile_mods_creates_root_and_file(tmp_path):
    mods_root = tmp_path / "Mods"
    order = tmp_path / "mods.txt"
    mods = OrderedCollection([ModEntry("Stale", True)])
    reconcile_mods(mods, order, mods_root)
    assert len(mods) == 0
    assert mods_root.is_dir()
    assert order.is_file()
