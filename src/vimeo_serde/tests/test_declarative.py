import datetime
import enum
import typing

import pytest

from ..declarative import Attr
from ..deferred import Deferred
from ..exceptions import InvalidDeclarationError
from ..models import Model
from .testing import Gadget, GadgetConnectionKeys, Maker, Owner


class Keys(enum.Enum):
    A = "a"


def test_build_descriptor():
    descr = Gadget.descriptor()
    assert descr.name == "Gadget"
    assert list(descr.attributes) == [
        "uri",
        "name",
        "count",
        "ratio",
        "enabled",
        "color",
        "colors",
        "created_time",
        "extras",
        "owner",
        "co_owners",
        "maker",
    ]
    assert descr.attributes["uri"].required
    assert not descr.attributes["name"].required
    assert descr.attributes["count"].type is int
    assert descr.attributes["name"].parent is descr
    assert descr.connection_keys is GadgetConnectionKeys
    assert descr.metadata_key == "metadata"


def test_attribute_for_key():
    descr = Gadget.descriptor()
    assert descr.attribute_for_key("display_name") is descr.attributes["name"]
    assert descr.attribute_for_key("count") is descr.attributes["count"]
    assert descr.attribute_for_key("name") is None
    assert descr.attribute_for_key("bogus") is None
    assert descr.encoding_key_for("name") == "display_name"
    assert descr.encoding_key_for("count") == "count"


def test_class_for_key():
    descr = Gadget.descriptor()
    assert descr.class_for_key("owner") is Owner
    assert descr.class_for_key("maker") is Maker
    assert descr.class_for_key("count") is None


def test_class_for_key_deferred_to_non_model():
    class Broken(Model):
        class Meta:
            attributes = {"thing": Attr()}
            classes_by_encoding_keys = {"thing": Deferred(lambda: int)}

    with pytest.raises(InvalidDeclarationError):
        Broken.descriptor().class_for_key("thing")


def test_attributes_as_sequence():
    class Seq(Model):
        class Meta:
            attributes = [Attr(str, name="a"), Attr(int, required=True, name="b")]

    assert list(Seq.descriptor().attributes) == ["a", "b"]
    assert Seq.descriptor().attributes["b"].required


def test_inherited_meta():
    class Special(Owner):
        @property
        def shout(self):
            return self.name.upper()

    assert list(Special.descriptor().attributes) == ["uri", "name"]
    assert Special.descriptor().name == "Special"


def test_without_meta():
    class Empty(Model):
        pass

    assert dict(Empty.descriptor().attributes) == {}
    assert Empty.descriptor().connection_keys is None


@pytest.mark.parametrize(
    "meta",
    [
        {"bogus_option": 1},
        {"attributes": {"_private": Attr(str)}},
        {"attributes": {"descriptor": Attr(str)}},
        {"attributes": {"a": Attr(complex)}},
        {"attributes": [Attr(str)]},
        {"attributes": ["a"]},
        {"attributes": "a"},
        {"attributes": 1},
        {"attributes": {"a": str}},
        {"attributes": {"a": Attr(str)}, "members_by_encoding_keys": {"b": "c"}},
        {"attributes": {"a": Attr(str)}, "classes_by_encoding_keys": {"b": Owner}},
        {"attributes": {"a": Attr()}, "classes_by_encoding_keys": {"a": int}},
        {"attributes": {"a": Attr(dict)}, "classes_by_encoding_keys": {"a": Owner}},
        {"connection_keys": str},
        {"connection_classes": {Keys.A: object}},
        {"connection_keys": Keys, "connection_classes": {Keys.A: object}},
        {"connection_keys": Keys, "connection_classes": {"a": object}},
    ],
)
def test_invalid_declarations(meta):
    with pytest.raises(InvalidDeclarationError):
        type("Invalid", (Model,), {"Meta": type("Meta", (), meta)})


def test_connection_classes():
    from ..connections import Connection

    class Special(Connection):
        pass

    class WithConnections(Model):
        class Meta:
            connection_keys = Keys
            connection_classes = {Keys.A: Special}

    assert WithConnections.descriptor().connection_classes == {Keys.A: Special}


def test_typed_attributes():
    class Typed(Model):
        class Meta:
            attributes = {
                "when": Attr(typing.Optional[datetime.datetime]),
                "tags": Attr(typing.List[str]),
                "pictures": Attr(typing.Dict[str, typing.Any]),
            }

    assert Typed.descriptor().attributes["tags"].type == typing.List[str]
