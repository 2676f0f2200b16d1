import pytest

from bound_config.core.schema.naming import derive_key, remove_verb, split_verb


@pytest.mark.parametrize(
    "name, expected",
    [
        ("getServerPort", "server-port"),
        ("setServerPort", "server-port"),
        ("setMaxHP", "max-hp"),
        ("getMaxPlayerCount", "max-player-count"),
        ("getHTTPPort", "httpport"),
        ("getPort", "port"),
        ("get_server_port", "server-port"),
        ("set_server_port", "server-port"),
    ],
)
def test_value_accessor_keys(name, expected):
    assert derive_key(name) == expected


def test_getter_and_setter_address_the_same_key():
    assert derive_key("getMaxHP") == derive_key("setMaxHP")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("maxPlayerCount", "max-player-count"),
        ("database", "database"),
        ("worldsByName", "worlds-by-name"),
        ("getWorlds", "get-worlds"),
    ],
)
def test_node_accessor_keys_keep_full_name(name, expected):
    assert derive_key(name, strip_verb=False) == expected


@pytest.mark.parametrize(
    "name, verb",
    [
        ("getPort", "get"),
        ("setPort", "set"),
        ("get_port", "get"),
        ("settings", None),
        ("getaway", None),
        ("get", None),
        ("get_", None),
        ("database", None),
    ],
)
def test_split_verb(name, verb):
    assert split_verb(name) == verb


def test_remove_verb_leaves_non_accessor_names_untouched():
    assert remove_verb("settings") == "settings"
    assert remove_verb("get_server_port") == "server_port"
    assert remove_verb("getServerPort") == "ServerPort"
