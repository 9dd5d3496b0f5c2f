import pytest

from sourcerepo.mapping import Mapper, RenameField
from sourcerepo.mapping.mapper import data_fields, is_array_like
from tests.conftest import Blank, Person, User

OBJ = {"test": 123}


def test_basic_mapping():
    m = Mapper(Person)
    o = m.to_single([{"name": "Bob", "age": 24}])
    assert vars(o) == {"name": "Bob", "age": 24}
    assert type(o) is Person


def test_custom_output_transform():
    def transform(slug, raw, instance):
        raw["name"] = raw.pop("n")
        raw["age"] = int(raw.pop("a"))

    m = Mapper(Person)
    m.use(transform)
    o = m.to_single({"n": "Bob", "a": "24"})
    assert vars(o) == {"name": "Bob", "age": 24}
    assert type(o) is Person


def test_to_single_unwraps_sequences():
    m = Mapper(Blank)
    assert vars(m.to_single(dict(OBJ))) == OBJ
    assert vars(m.to_single([dict(OBJ)])) == OBJ
    assert vars(m.to_single((dict(OBJ), {"other": 1}))) == OBJ


@pytest.mark.parametrize("thing", [None, [], [None]], ids=["none", "empty list", "list of none"])
def test_to_single_absent_yields_empty_instance(thing):
    m = Mapper(Person)
    o = m.to_single(thing)
    assert type(o) is Person
    assert vars(o) == vars(m.transform_output({}))


def test_to_many():
    m = Mapper(Blank)
    assert [vars(o) for o in m.to_many(dict(OBJ))] == [OBJ]
    assert [vars(o) for o in m.to_many([dict(OBJ)])] == [OBJ]
    assert m.to_many([]) == []


@pytest.mark.parametrize("things", [None, [None]], ids=["none", "list of none"])
def test_to_many_absent_wraps_into_one_empty_instance(things):
    m = Mapper(Blank)
    result = m.to_many(things)
    assert len(result) == 1
    assert type(result[0]) is Blank
    assert vars(result[0]) == {}


def test_to_many_gives_each_item_a_fresh_instance():
    m = Mapper(User)
    a, b = m.to_many([{"id": 1}, {"id": 2}])
    assert a is not b
    assert (a.id, b.id) == (1, 2)


def test_transform_output_reuses_hint_of_exact_type():
    m = Mapper(User)
    hint = User(id=7, name="x")
    o = m.transform_output({"name": "y"}, hint)
    assert o is hint
    assert o == User(id=7, name="y")


def test_transform_output_ignores_hint_of_other_type():
    class Admin(User):
        pass

    m = Mapper(User)
    for hint in ({"id": 7}, Admin(id=7), Person()):
        o = m.transform_output({"name": "y"}, hint)
        assert type(o) is User
        assert o is not hint
        assert o == User(id=None, name="y")


def test_transform_may_replace_instance():
    class Admin(User):
        pass

    seen = []

    def promote(slug, raw, instance):
        if raw.pop("admin", False):
            return Admin(id=instance.id, name=instance.name)

    def record(slug, raw, instance):
        seen.append(instance)

    m = Mapper(User).use(promote).use(record)
    o = m.transform_output({"id": 1, "admin": True, "name": "root"})
    assert type(o) is Admin
    assert seen == [o]
    assert o.name == "root"
    assert not hasattr(o, "admin")


def test_catch_all_copy_keeps_untouched_keys():
    m = Mapper(User).use(RenameField("n", "name"))
    o = m.transform_output({"n": "bob", "email": "bob@example.com", "id": 3})
    assert o.name == "bob"
    assert o.email == "bob@example.com"
    assert o.id == 3


def test_catch_all_copy_from_plain_object():
    class Row:
        def __init__(self):
            self.id = 9
            self.name = "row"

        def describe(self):
            return "row"

    o = Mapper(User).transform_output(Row())
    assert o == User(id=9, name="row")


def test_transform_output_scalar_has_nothing_to_copy():
    o = Mapper(User).to_single("abc")
    assert o == User()


def test_input_transform():
    m = Mapper(Person)
    o = m.transform_input({"name": "Bob", "age": 24})
    assert o == {"name": "Bob", "age": 24}
    assert type(o) is dict


def test_transform_input_skips_callables_and_serialization_hooks():
    class Rich(User):
        def to_json(self):
            return "{}"

    item = Rich(id=1, name="bob")
    item.callback = lambda: None
    item.to_dict = lambda: {}
    assert Mapper(User).transform_input(item) == {"id": 1, "name": "bob"}


def test_transform_input_fills_given_slug():
    slug = {"tenant": "t1"}
    out = Mapper(User).transform_input(User(id=1, name="bob"), slug)
    assert out is slug
    assert out == {"tenant": "t1", "id": 1, "name": "bob"}


def test_transform_input_reads_slots():
    class Slotted:
        __slots__ = ("id", "name")

        def __init__(self):
            self.id = 5
            self.name = "s"

    assert Mapper(User).transform_input(Slotted()) == {"id": 5, "name": "s"}


def test_custom_input_output_transform():
    def transform(slug, raw, instance):
        if slug is not None:
            slug["n"] = str(instance["name"] if isinstance(instance, dict) else instance.name)
            del slug["name"]
            slug["a"] = str(slug.pop("age"))
        else:
            raw["name"] = str(raw.pop("n"))
            raw["age"] = int(raw.pop("a"))

    m = Mapper(Person).use(transform)
    o = m.transform_output({"n": "Bob", "a": "25"})
    assert vars(o) == {"name": "Bob", "age": 25}
    assert type(o) is Person
    assert m.transform_input({"name": "Bob", "age": 24}) == {"n": "Bob", "a": "24"}


def test_transform_order_is_reversed_for_input():
    calls = []

    def step(label):
        def f(slug, raw, instance):
            calls.append((label, "in" if slug is not None else "out"))
        return f

    m = Mapper(User).use(step("f1")).use(step("f2"))
    o = m.transform_output({"id": 1})
    m.transform_input(o)
    assert calls == [("f1", "out"), ("f2", "out"), ("f2", "in"), ("f1", "in")]


def test_transform_exception_propagates():
    def boom(slug, raw, instance):
        raise RuntimeError("bad transform")

    m = Mapper(User).use(boom)
    with pytest.raises(RuntimeError, match="bad transform"):
        m.transform_output({})


def test_use_rejects_non_callables():
    with pytest.raises(TypeError):
        Mapper(User).use(42)


def test_helpers():
    assert is_array_like([1]) and is_array_like(())
    assert not is_array_like("ab") and not is_array_like({"a": 1}) and not is_array_like(None)
    assert dict(data_fields({"a": 1, "f": len})) == {"a": 1}
    assert list(data_fields(None)) == []


def test_to_many_accepts_any_collection():
    m = Mapper(User)
    rows = {1: {"id": 1}, 2: {"id": 2}}
    assert m.to_many(rows.values()) == [User(id=1), User(id=2)]
    assert m.to_many(row for row in [{"id": 3}, {"id": 4}]) == [User(id=3), User(id=4)]
    assert m.to_many(filter(None, [{"id": 5}])) == [User(id=5)]
    assert m.to_many(iter([])) == []


def test_to_single_takes_first_of_any_collection():
    m = Mapper(User)
    assert m.to_single({"a": {"id": 1}}.values()) == User(id=1)
    assert m.to_single(row for row in [{"id": 2}, {"id": 3}]) == User(id=2)
    assert m.to_single(iter([])) == User()


def test_object_payload_runs_through_transforms():
    class Row:
        def __init__(self):
            self.id = 9
            self.n = "row"

    o = Mapper(User).use(RenameField("n", "name")).transform_output(Row())
    assert o == User(id=9, name="row")
    assert not hasattr(o, "n")


def test_string_payload_reaches_transforms_as_empty_mapping():
    seen = []

    def record(slug, raw, instance):
        seen.append(raw)

    o = Mapper(User).use(RenameField("n", "name")).use(record).to_single("name")
    assert o == User()
    assert seen == [{}]
