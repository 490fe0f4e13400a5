from datetime import datetime, timezone

import pytest

from scmlink_core.modification import ChangeType, Modification, last_change_number

WHEN = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_last_change_number_of_empty_sequence_is_zero():
    assert last_change_number([]) == 0


def test_last_change_number_is_maximum_not_last():
    mods = [Modification(9, "a", WHEN), Modification(3, "b", WHEN), Modification(7, "c", WHEN)]
    assert last_change_number(mods) == 9


def test_from_path_splits_folder_and_file():
    mod = Modification.from_path("/trunk/src/app.py", change_number=4, user_name="alice", modified_time=WHEN)
    assert mod.folder_name == "/trunk/src"
    assert mod.file_name == "app.py"
    assert mod.path == "/trunk/src/app.py"


def test_defaults_are_unenriched():
    mod = Modification(1, "alice", WHEN)
    assert mod.url is None
    assert mod.issue_url is None
    assert mod.type is ChangeType.UNKNOWN


def test_negative_change_number_rejected():
    with pytest.raises(ValueError, match="change_number"):
        Modification(-1, "alice", WHEN)


def test_to_dict_uses_plain_values():
    mod = Modification.from_path("/trunk/a.txt", change_number=2, user_name="bob", modified_time=WHEN, type=ChangeType.ADDED)
    data = mod.to_dict()
    assert data["type"] == "added"
    assert data["path"] == "/trunk/a.txt"
    assert data["modified_time"] == "2024-05-01T12:00:00+00:00"
