import pytest

from sourcerepo.mapping import CoerceField, DropField, FunctionTransform, Mapper, RenameField, Transform
from tests.conftest import User


def test_stock_transforms_satisfy_protocol():
    for t in (RenameField("n", "name"), CoerceField("id"), DropField("x"), FunctionTransform(lambda s, r, i: None)):
        assert isinstance(t, Transform)


def test_rename_and_coerce_round_trip():
    m = Mapper(User).use(RenameField("n", "name")).use(CoerceField("id", output=str, input=int))

    user = m.transform_output({"n": "bob", "id": 1})
    assert user == User(id="1", name="bob")

    assert m.transform_input(user) == {"n": "bob", "id": 1}


def test_input_runs_in_reverse_so_layers_unwind():
    # output: n -> name, then name -> display; input must undo display -> name -> n
    m = Mapper(User).use(RenameField("n", "name")).use(RenameField("name", "display"))
    user = m.transform_output({"n": "bob"})
    assert user.display == "bob"
    assert m.transform_input(user) == {"id": None, "n": "bob"}


def test_rename_ignores_missing_keys():
    m = Mapper(User).use(RenameField("n", "name"))
    assert m.transform_output({"id": 1}) == User(id=1)
    assert m.transform_input({"id": 1}) == {"id": 1}


def test_drop_field_directions():
    secret = User(id=1, name="bob")
    secret.password = "hunter2"

    m = Mapper(User).use(DropField("password"))
    assert "password" not in m.transform_input(secret)
    assert m.transform_output({"password": "x"}).password == "x"

    m = Mapper(User).use(DropField("internal", direction="output"))
    assert not hasattr(m.transform_output({"internal": 1}), "internal")
    assert m.transform_input({"internal": 1}) == {"internal": 1}

    m = Mapper(User).use(DropField("etag", direction="both"))
    assert not hasattr(m.transform_output({"etag": "a"}), "etag")
    assert m.transform_input({"etag": "a"}) == {}


def test_drop_field_rejects_unknown_direction():
    with pytest.raises(ValueError):
        DropField("x", direction="sideways")


def test_function_transform_dispatch():
    calls = []

    def f(slug, raw, instance):
        calls.append((slug, raw))
        return "replacement" if raw is not None else "ignored"

    t = FunctionTransform(f)
    assert t.apply_output({"a": 1}, None) == "replacement"
    assert t.apply_input({"b": 2}, None) is None
    assert calls == [(None, {"a": 1}), ({"b": 2}, None)]
