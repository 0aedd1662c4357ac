"""Tests for the INI document model."""

import os

import pytest

from pyrampastring.conversions import BooleanStringStyle
from pyrampastring.ini import (
    IniFile,
    IniKeyExistsError,
    IniSection,
    IniSectionExistsError,
)


@pytest.fixture
def ini():
    doc = IniFile()
    doc.set_string("General", "Name", "Player")
    doc.set_string("General", "Side", "0")
    doc.set_string("Video", "Width", "1024")
    doc.set_string("Audio", "Volume", "0.75")
    return doc


class TestIniSection:

    def test_upsert_keeps_one_entry(self):
        sect = IniSection("S")
        sect.set_string("K", "a")
        sect.set_string("K", "b")
        assert sect.get_string("K", "") == "b"
        assert list(sect.keys()) == ["K"]

    def test_upsert_keeps_position(self):
        sect = IniSection("S", {"A": "1", "B": "2", "C": "3"})
        sect["A"] = "9"
        assert list(sect.items()) == [("A", "9"), ("B", "2"), ("C", "3")]

    def test_strict_add_conflict(self):
        sect = IniSection("S")
        sect.add_key("K", "a")
        with pytest.raises(IniKeyExistsError):
            sect.add_key("K", "b")
        assert sect["K"] == "a"

    @pytest.mark.parametrize("key, value", [(None, "v"), ("k", None)])
    def test_none_rejected(self, key, value):
        sect = IniSection("S")
        with pytest.raises(ValueError):
            sect.add_key(key, value)
        with pytest.raises(ValueError):
            sect.add_or_replace_key(key, value)
        assert len(sect) == 0

    def test_remove_key(self):
        sect = IniSection("S", {"A": "1"})
        sect.remove_key("A")
        sect.remove_key("missing")
        assert not sect.key_exists("A")

    def test_typed_getters(self):
        sect = IniSection("S", {
            "Int": "12", "Bad": "notanumber", "Real": "2.5",
            "Flag": "yes", "Odd": "xyz",
        })
        assert sect.get_int("Int", 0) == 12
        assert sect.get_int("Bad", 7) == 7
        assert sect.get_int("Missing", 3) == 3
        assert sect.get_double("Real", 0.0) == 2.5
        assert sect.get_float("Real", 0.0) == 2.5
        assert sect.get_bool("Flag", False) is True
        assert sect.get_bool("Odd", False) is False
        assert sect.get_bool("Missing", True) is True

    def test_typed_setters(self):
        sect = IniSection("S")
        sect.set_int("I", 5)
        sect.set_double("D", 1.0)
        sect.set_float("F", 0.5)
        sect.set_float("Fixed", 3.14159, decimals=2)
        sect.set_bool("B", True)
        sect.set_bool("Y", False, BooleanStringStyle.YESNO)
        assert dict(sect) == {
            "I": "5", "D": "1", "F": "0.5", "Fixed": "3.14",
            "B": "True", "Y": "No",
        }

    def test_set_float_single_precision(self):
        sect = IniSection("S")
        sect.set_float("F", 1 / 3)
        assert sect["F"] == "0.33333334"
        assert sect.get_float("F", 0.0) == pytest.approx(1 / 3)
        assert sect.get_float("F", 0.0) != 1 / 3

    def test_list_values(self):
        sect = IniSection("S", {"L": "1,,2,3,"})
        assert sect.get_list("L", ",", int) == [1, 2, 3]
        assert sect.get_list("L") == ["1", "2", "3"]
        assert sect.get_list("Missing", ",", int) == []
        sect.set_list("M", [4, 5], ":")
        assert sect["M"] == "4:5"

    def test_path_string(self):
        sect = IniSection("S", {"P": "Maps/Custom\\a.map"})
        assert sect.get_path_string("P", "") == os.path.join(
            "Maps", "Custom", "a.map")
        assert sect.get_path_string("Missing", "x/y") == os.path.join(
            "x", "y")

    def test_repr(self):
        assert str(IniSection("S")) == "[S]"
        assert repr(IniSection("S", {"a": "b"})) == "[S] { .cnt = 1 }"


class TestIniFileAccess:

    def test_get_string_defaults(self, ini):
        assert ini.get_string("General", "Name", "X") == "Player"
        assert ini.get_string("General", "missing", "X") == "X"
        assert ini.get_string("Nope", "Name", "X") == "X"

    def test_try_get_string(self, ini):
        assert ini.try_get_string("General", "Name", "") == ("Player", True)
        assert ini.try_get_string("General", "Nope", "d") == ("d", False)
        assert ini.try_get_string("Nope", "Name", "d") == ("d", False)

    def test_typed_getters_missing_section(self, ini):
        assert ini.get_int("Nope", "K", 7) == 7
        assert ini.get_double("Nope", "K", 1.5) == 1.5
        assert ini.get_float("Nope", "K", 1.5) == 1.5
        assert ini.get_bool("Nope", "K", True) is True
        assert ini.get_path_string("Nope", "K", "d") == "d"
        assert ini.get_list("Nope", "K", ",", int) == []

    def test_typed_getters(self, ini):
        assert ini.get_int("Video", "Width", 0) == 1024
        assert ini.get_double("Audio", "Volume", 0.0) == 0.75
        ini.set_string("Video", "Width", "notanumber")
        assert ini.get_int("Video", "Width", 7) == 7

    def test_setters_create_section(self, ini):
        ini.set_int("New", "I", 3)
        ini.set_bool("New", "B", True, BooleanStringStyle.ONEZERO)
        ini.set_double("New", "D", 0.5)
        ini.set_float("New", "F", 2.0, 1)
        ini.set_list("New", "L", ["a", "b"])
        assert ini.get_sections()[-1] == "New"
        assert dict(ini["New"]) == {
            "I": "3", "B": "1", "D": "0.5", "F": "2.0", "L": "a,b"}

    def test_upsert_invariant(self, ini):
        ini.set_string("General", "K", "a")
        ini.set_string("General", "K", "b")
        assert ini.get_string("General", "K", "") == "b"
        assert ini.get_section_keys("General").count("K") == 1

    def test_existence(self, ini):
        assert ini.section_exists("Video")
        assert not ini.section_exists("video")
        assert ini.key_exists("Video", "Width")
        assert not ini.key_exists("Video", "Height")
        assert not ini.key_exists("Nope", "Width")

    def test_section_keys_absent_vs_empty(self, ini):
        ini.add_section("Empty")
        assert ini.get_section_keys("NoSuchSection") is None
        assert ini.get_section_keys("Empty") == []
        assert ini.get_section_keys("General") == ["Name", "Side"]

    def test_get_section(self, ini):
        assert ini.get_section("Audio").name == "Audio"
        # backwards after a forward hit still works
        assert ini.get_section("General").name == "General"
        assert ini.get_section("Nope") is None
        assert ini.get_section("Video").name == "Video"

    def test_mapping_protocol(self, ini):
        assert list(ini) == ["General", "Video", "Audio"]
        assert len(ini) == 3
        assert "Video" in ini
        assert ini["Video"]["Width"] == "1024"
        with pytest.raises(KeyError):
            ini["Nope"]

    def test_setitem_copies(self, ini):
        source = {"A": "1"}
        ini["Copy"] = source
        source["A"] = "2"
        assert ini.get_string("Copy", "A", "") == "1"

        ini["Video"] = IniSection("Other", {"Height": "768"})
        assert ini.get_sections() == ["General", "Video", "Audio", "Copy"]
        assert ini["Video"].name == "Video"
        assert dict(ini["Video"]) == {"Height": "768"}

    def test_delitem(self, ini):
        del ini["Video"]
        assert ini.get_sections() == ["General", "Audio"]
        with pytest.raises(KeyError):
            del ini["Video"]


class TestIniFileSections:

    def test_add_section(self, ini):
        sect = ini.add_section("Extra")
        assert isinstance(sect, IniSection)
        assert ini.get_sections()[-1] == "Extra"
        ini.add_section(IniSection("Obj", {"k": "v"}))
        assert ini.get_string("Obj", "k", "") == "v"

    def test_add_duplicate_section(self, ini):
        with pytest.raises(IniSectionExistsError):
            ini.add_section("Video")
        assert ini.get_sections().count("Video") == 1

    def test_remove_section_ignores_case(self, ini):
        assert ini.remove_section("video")
        assert ini.get_sections() == ["General", "Audio"]
        assert not ini.remove_section("video")

    def test_remove_key(self, ini):
        ini.remove_key("General", "Name")
        ini.remove_key("Nope", "Name")
        assert ini.get_section_keys("General") == ["Side"]

    def test_erase_section_keys(self, ini):
        ini.erase_section_keys("General")
        ini.erase_section_keys("Nope")
        assert ini.section_exists("General")
        assert ini.get_section_keys("General") == []

    def test_move_section_to_first(self, ini):
        ini.move_section_to_first("Audio")
        assert ini.get_sections() == ["Audio", "General", "Video"]
        ini.move_section_to_first("Nope")
        assert ini.get_sections() == ["Audio", "General", "Video"]

    def test_combine_sections(self):
        ini = IniFile()
        ini["First"] = {"A": "1", "B": "2"}
        ini["Second"] = {"B": "9", "C": "3"}
        ini.combine_sections("First", "Second")
        assert list(ini["Second"].items()) == [
            ("A", "1"), ("B", "9"), ("C", "3")]
        assert dict(ini["First"]) == {"A": "1", "B": "2"}
        assert ini.get_sections() == ["First", "Second"]

    def test_combine_missing_is_noop(self, ini):
        before = {k: dict(v) for k, v in ini.items()}
        ini.combine_sections("Nope", "Video")
        ini.combine_sections("Video", "Nope")
        assert {k: dict(v) for k, v in ini.items()} == before

    def test_rename_section(self, ini):
        assert ini.rename_section("Video", "Display")
        assert ini.get_sections() == ["General", "Display", "Audio"]
        assert ini.get_int("Display", "Width", 0) == 1024
        assert not ini.rename_section("Nope", "X")
        assert not ini.rename_section("Display", "Audio")

    def test_consolidate(self):
        base = IniFile()
        base["X"] = {"a": "1", "b": "2"}
        child = IniFile()
        child["X"] = {"b": "9", "c": "3"}
        child["Y"] = {}
        IniFile.consolidate(base, child)
        assert list(base["X"].items()) == [("a", "1"), ("b", "9"), ("c", "3")]
        assert base.get_sections() == ["X", "Y"]

    def test_clear(self, ini):
        ini.clear()
        assert len(ini) == 0
        assert ini.get_section("General") is None
