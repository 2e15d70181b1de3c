"""Tests for d20audit.storage."""

import pytest

from d20audit.registry import PlayerRegistry
from d20audit.storage import (
    SaveFileError,
    format_slots,
    load_registry,
    parse_slots,
    save_registry,
)


def test_format_and_parse_slots():
    assert format_slots([18, -1, -1]) == "[18, -1, -1]"
    assert parse_slots("[18, -1, -1]") == [18, -1, -1]
    assert parse_slots(" [ 1,2 ,3 ] ") == [1, 2, 3]
    assert parse_slots("[]") == []


def test_parse_slots_rejects_garbage():
    with pytest.raises(ValueError):
        parse_slots("[1, x, 3]")


def test_save_writes_expected_format(tmp_path):
    registry = PlayerRegistry(table_size=3, threshold=1000)
    registry.add_player("Vova").record_roll(18)

    path = tmp_path / "players.txt"
    save_registry(registry, str(path))

    assert path.read_text() == "p:1000.0\n---global---\nVova\n[18, -1, -1]\n1\n---\n"


def test_save_and_load_preserve_players(tmp_path):
    registry = PlayerRegistry(table_size=5, threshold=250.5)
    vova = registry.add_player("Vova")
    for value in [1, 2, 3, 4, 5, 6, 7]:
        vova.record_roll(value)
    registry.add_player("Dima")

    path = str(tmp_path / "players.txt")
    save_registry(registry, path)
    loaded = load_registry(path)

    assert loaded.threshold == 250.5
    assert [p.name for p in loaded.players] == ["Vova", "Dima"]
    assert loaded.players[0].slots == [6, 7, 3, 4, 5]
    assert loaded.players[0].write_cursor == 2
    assert loaded.players[1].slots == [-1] * 5
    assert loaded.players[1].write_cursor == 0


def test_load_replaces_existing_players(tmp_path):
    path = tmp_path / "players.txt"
    path.write_text("p:10.0\n---global---\nVova\n[1, -1]\n1\n---\n")

    registry = PlayerRegistry()
    registry.add_player("Old")
    result = load_registry(str(path), registry)

    assert result is registry
    assert [p.name for p in registry.players] == ["Vova"]
    assert registry.threshold == 10.0


def test_load_without_threshold_line(tmp_path):
    path = tmp_path / "players.txt"
    path.write_text("---global---\nVova\n[1, -1]\n1\n")

    registry = load_registry(str(path), PlayerRegistry(threshold=42.0))
    assert registry.threshold == 42.0
    assert registry.get_player("Vova").slots == [1, -1]


def test_load_skips_blank_lines(tmp_path):
    path = tmp_path / "players.txt"
    path.write_text("p:1000.0\n---global---\n\nVova\n[1, -1]\n1\n---\n\n")
    assert len(load_registry(str(path))) == 1


def test_load_empty_file(tmp_path):
    path = tmp_path / "players.txt"
    path.write_text("")
    assert len(load_registry(str(path))) == 0


@pytest.mark.parametrize(
    "content, line_number",
    [
        ("p:abc\n---global---\n", 1),
        ("p:1.0\n---global---\nVova\n[1, x]\n1\n---\n", 4),
        ("p:1.0\n---global---\nVova\n[1, -1]\nfirst\n---\n", 5),
        ("p:1.0\n---global---\nVova\n[25, -1]\n1\n---\n", 3),
        ("p:1.0\n---global---\nVova\n[1, -1]\n", 3),
    ],
)
def test_malformed_file(tmp_path, content, line_number):
    path = tmp_path / "players.txt"
    path.write_text(content)

    with pytest.raises(SaveFileError) as excinfo:
        load_registry(str(path))
    assert excinfo.value.line_number == line_number


def test_failed_load_leaves_registry_untouched(tmp_path):
    path = tmp_path / "players.txt"
    path.write_text(
        "p:5.0\n---global---\nA\n[1, -1]\n1\n---\nB\n[1, x]\n1\n---\n"
    )

    registry = PlayerRegistry(threshold=1000.0)
    registry.add_player("Keep")

    with pytest.raises(SaveFileError):
        load_registry(str(path), registry)
    assert [p.name for p in registry.players] == ["Keep"]
    assert registry.threshold == 1000.0
