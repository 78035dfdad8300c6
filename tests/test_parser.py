import pytest

from fgtparse.parser import ParseError, parse_forti, tokenize

ADDRESS_CONF = """\
config firewall address
    edit "web-server"
        set associated-interface "port1"
        set subnet 10.0.0.10 255.255.255.255
        set comment "Main web"
    next
    edit "example-fqdn"
        set type fqdn
        set fqdn "www.example.com"
    next
end
"""


def test_tokenize_plain_words():
    assert tokenize("set action accept") == ["set", "action", "accept"]


def test_tokenize_quoted_words_are_grouped():
    assert tokenize('set comment "hello world"') == ["set", "comment", "hello world"]
    assert tokenize("set comment 'a b c'") == ["set", "comment", "a b c"]


def test_tokenize_unquoted_hash_ends_line():
    assert tokenize("set a b # trailing note") == ["set", "a", "b"]


def test_tokenize_quoted_hash_is_kept():
    assert tokenize('set a "x#y"') == ["set", "a", "x#y"]


def test_tokenize_backslash_escapes_space():
    assert tokenize("set a b\\ c") == ["set", "a", "b c"]


def test_tokenize_trailing_backslash_is_prefixed():
    assert tokenize("set a b\\") == ["set", "a", "\\b"]


def test_tokenize_blank_and_comment_lines():
    assert tokenize("    ") == []
    assert tokenize("# only a comment") == []


def test_parse_address_table():
    parsed = parse_forti(ADDRESS_CONF)
    table = parsed["firewall"]["address"]
    assert set(table) == {"web-server", "example-fqdn"}
    assert table["web-server"]["subnet"] == ["10.0.0.10", "255.255.255.255"]
    assert table["web-server"]["comment"] == "Main web"
    assert table["example-fqdn"]["fqdn"] == "www.example.com"


def test_parse_commands_are_case_insensitive():
    parsed = parse_forti("CONFIG system global\nSET hostname fw1\nEND\n")
    assert parsed["system"]["global"]["hostname"] == "fw1"


def test_parse_handles_crlf():
    parsed = parse_forti("config system global\r\n set hostname fw1\r\nend\r\n")
    assert parsed["system"]["global"]["hostname"] == "fw1"


def test_set_without_values_gives_empty_list():
    parsed = parse_forti('config system global\nset alias ""\nend\n')
    assert parsed["system"]["global"]["alias"] == []


def test_append_to_string_makes_list():
    text = "config system dns\nset server a\nappend server b c\nend\n"
    assert parse_forti(text)["system"]["dns"]["server"] == ["a", "b", "c"]


def test_append_to_list_extends():
    text = "config system dns\nset server a b\nappend server c\nend\n"
    assert parse_forti(text)["system"]["dns"]["server"] == ["a", "b", "c"]


def test_append_to_missing_key_creates_list():
    text = "config system dns\nappend server c\nend\n"
    assert parse_forti(text)["system"]["dns"]["server"] == ["c"]


def test_unset_stores_none():
    text = "config system global\nset hostname fw1\nunset hostname\nend\n"
    parsed = parse_forti(text)
    assert "hostname" in parsed["system"]["global"]
    assert parsed["system"]["global"]["hostname"] is None


def test_end_pops_one_level():
    text = "config system global\nset hostname fw1\nend\nset stray value\n"
    parsed = parse_forti(text)
    assert parsed["system"]["stray"] == "value"
    assert parsed["system"]["global"] == {"hostname": "fw1"}


def test_set_outside_config_goes_to_root():
    assert parse_forti("set top x") == {"top": "x"}


def test_edit_outside_config_is_ignored():
    assert parse_forti("edit lonely\nnext\n") == {}


def test_edit_keeps_existing_entry():
    text = (
        "config firewall address\nedit a\nset x 1\nnext\n"
        "edit a\nset y 2\nnext\nend\n"
    )
    assert parse_forti(text)["firewall"]["address"]["a"] == {"x": "1", "y": "2"}


def test_set_without_key_raises():
    with pytest.raises(ParseError):
        parse_forti("config system global\nset\nend\n")


def test_set_into_overwritten_entry_raises():
    text = (
        "config firewall address\nedit a\nnext\n"
        "set a broken\nedit a\nset x y\n"
    )
    with pytest.raises(ParseError):
        parse_forti(text)


def test_config_through_value_raises():
    text = "config system\nset global x\nend\nconfig system global interface\n"
    with pytest.raises(ParseError):
        parse_forti(text)