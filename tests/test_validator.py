import pytest

from kieserver.model import GetKVRequest, KVDoc, ListKVRequest
from kieserver.validator import ValidationError, check_rule, validate

STRING32 = "a" * 32
STRING2048 = "a" * 2048
STRING131072 = "a" * 131072


def kv(**kwargs):
    fields = {"project": "a", "domain": "a", "key": "a", "value": "a"}
    fields.update(kwargs)
    return KVDoc(**fields)


@pytest.mark.parametrize("value", ["a", "", STRING131072])
def test_value_accepted(value):
    doc = kv(value=value)
    assert validate(doc) is doc


def test_value_too_long():
    with pytest.raises(ValidationError) as info:
        validate(kv(value=STRING131072 + "a"))
    assert info.value.failures == [("value", "max")]


@pytest.mark.parametrize(
    "key, value",
    [
        ("zZ12.-_:", "zZ12.-_:"),
        ("...zZ12.-_:", "......asdfakdjlkaj;eje#$@%$RE$5zZ12.-_:"),
        ("_...zZ12.-_:", "adslfjkla"),
        ("-_...zZ12.-_:", "adslfjkla"),
    ],
)
def test_key_accepted(key, value):
    doc = kv(key=key, value=value)
    assert validate(doc) is doc


@pytest.mark.parametrize("key", ["", "a#", STRING2048 + "a"])
def test_key_rejected(key):
    with pytest.raises(ValidationError):
        validate(kv(key=key))


def test_list_key_begin_with_accepted():
    req = ListKVRequest(project="a", domain="a", key="beginWith(a)")
    assert validate(req) is req


@pytest.mark.parametrize("key", ["beginW(a)", "beginW()"])
def test_list_key_rejected(key):
    with pytest.raises(ValidationError):
        validate(ListKVRequest(project="a", domain="a", key=key))


@pytest.mark.parametrize("labels", [None, {"a": "a"}, {"a": ""}])
def test_labels_accepted(labels):
    doc = kv(labels=labels)
    assert validate(doc) is doc


@pytest.mark.parametrize(
    "labels",
    [
        {"": ""},
        {"": "a"},
        {str(i): "a" for i in range(1, 8)},
        {**{str(i): "a" for i in range(1, 6)}, "6-" + "x" * 31: "a"},
        {**{str(i): "a" for i in range(1, 6)}, "6": "a-" + "x" * 159},
        {STRING32 + "a": "a"},
    ],
)
def test_labels_rejected(labels):
    with pytest.raises(ValidationError):
        validate(kv(labels=labels))


@pytest.mark.parametrize("value_type", ["text", ""])
def test_value_type_accepted(value_type):
    doc = kv(value_type=value_type)
    assert validate(doc) is doc


def test_value_type_rejected():
    with pytest.raises(ValidationError) as info:
        validate(kv(value_type="a"))
    assert info.value.failures == [("value_type", "valueType")]


@pytest.mark.parametrize("status", ["", "enabled"])
def test_status_accepted(status):
    doc = kv(status=status)
    assert validate(doc) is doc


def test_status_rejected():
    with pytest.raises(ValidationError):
        validate(kv(status="a"))


@pytest.mark.parametrize(
    "key",
    ["beginWith(zZ12.-_:)", "wildcard(*IME*)", "zZ12.-_:", "wildcard(*zZ12.-_:*)"],
)
def test_get_key(key):
    req = ListKVRequest(
        project="default",
        domain="default",
        key=key,
        labels={"service": "utService"},
        offset=0,
        limit=10,
        status="enabled",
        match="exact",
    )
    assert validate(req) is req


def test_list_limit_above_maximum():
    with pytest.raises(ValidationError) as info:
        validate(ListKVRequest(project="a", domain="a", limit=101))
    assert info.value.failures == [("limit", "max")]


def test_get_request_requires_id():
    with pytest.raises(ValidationError) as info:
        validate(GetKVRequest(project="a", domain="a"))
    assert info.value.failures == [("id", "min")]


def test_check_rule():
    assert check_rule("check", "print('x')") is True
    assert check_rule("check", "é") is False
    assert check_rule("commonName", "a.b-c") is True
    assert check_rule("commonName", "-a") is False


def test_unknown_rule():
    with pytest.raises(ValueError):
        check_rule("nope", "a")


def test_unsupported_type():
    with pytest.raises(TypeError):
        validate(object())