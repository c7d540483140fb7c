from kieserver.stringutil import LABEL_NONE, format_map


def test_format_is_order_independent():
    s = format_map({"service": "a", "version": "1"})
    s2 = format_map({"version": "1", "service": "a"})
    assert s == s2
    assert s == "service=a::version=1"


def test_format_none():
    assert format_map(None) == "none"


def test_format_empty():
    assert format_map({}) == LABEL_NONE


def test_format_single_label_has_no_separator():
    assert format_map({"app": "mall"}) == "app=mall"