from kieserver.labels import is_contain_label, is_equivalent_label


def test_is_equivalent_label():
    m1 = None
    m2 = {}
    m3 = {"foo": "bar"}
    m4 = {"foo": "bar"}
    m5 = {"bar": "foo"}
    assert is_equivalent_label(m1, m1) is True
    assert is_equivalent_label(m1, m2) is True
    assert is_equivalent_label(m2, m3) is False
    assert is_equivalent_label(m3, m4) is True
    assert is_equivalent_label(m3, m5) is False


def test_is_equivalent_label_different_sizes():
    m1 = {"foo": "bar", "a": "b"}
    m2 = {"foo": "bar", "c": "d", "s": "d"}
    assert is_equivalent_label(m1, m2) is False


def test_is_contain_label_subset():
    assert is_contain_label({"app": "mall", "service": "cart"}, {"app": "mall"}) is True


def test_is_contain_label_value_mismatch():
    assert is_contain_label({"app": "mall"}, {"app": "shop"}) is False


def test_is_contain_label_larger_query():
    assert is_contain_label({"app": "mall"}, {"app": "mall", "service": "cart"}) is False


def test_is_contain_label_empty_query():
    assert is_contain_label({"app": "mall"}, {}) is True
    assert is_contain_label(None, None) is True