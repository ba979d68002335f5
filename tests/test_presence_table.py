import pytest

from notifybot.presence import PresenceChange, PresenceTable


def test_new_table_marks_every_peer_offline():
    table = PresenceTable(["alice", "bob"])
    assert dict(table) == {"alice": False, "bob": False}
    assert table.peers == ("alice", "bob")


def test_apply_reports_only_flips():
    table = PresenceTable(["alice", "bob"])
    table.seed("bob", True)

    changes = table.apply({"alice", "bob"})

    assert changes == [PresenceChange("alice", True)]
    assert table["alice"] is True and table["bob"] is True


def test_apply_empty_result_takes_everyone_offline():
    table = PresenceTable(["alice", "bob"])
    table.seed("alice", True)
    table.seed("bob", True)

    changes = table.apply(())

    assert changes == [PresenceChange("alice", False), PresenceChange("bob", False)]
    assert table.online_peers() == []


def test_apply_same_result_twice_is_quiet_the_second_time():
    table = PresenceTable(["alice"])
    assert table.apply({"alice"}) == [PresenceChange("alice", True)]
    assert table.apply({"alice"}) == []


def test_untracked_names_never_become_keys():
    table = PresenceTable(["alice"])
    table.apply({"mallory", "alice"})
    assert list(table) == ["alice"]
    assert len(table) == 1


def test_seed_rejects_unknown_peer():
    table = PresenceTable(["alice"])
    with pytest.raises(KeyError):
        table.seed("mallory", True)


@pytest.mark.parametrize(
    "change,text",
    [
        (PresenceChange("alice", True), "alice is online"),
        (PresenceChange("bob", False), "bob is offline"),
    ],
)
def test_change_description(change, text):
    assert change.describe() == text
