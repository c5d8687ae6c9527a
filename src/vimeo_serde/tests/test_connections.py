import dataclasses
import enum
import typing

import pytest

from ..request import Request
from ..utils import JSONPointer
from .testing import Gadget, Owner


class FolderConnectionKeys(enum.Enum):
    VIDEOS = "videos"


class NoteConnectionKeys(enum.Enum):
    NOTES = "notes"
    VIDEOS = "videos"


@pytest.fixture
def target():
    from ..connections import ConnectionsParser

    return ConnectionsParser


def test_only_declared_keys(target):
    result = target(FolderConnectionKeys)(
        {
            "connections": {
                "videos": {"uri": "/v", "options": ["GET"], "total": 3},
                "unrelated": {"uri": "/u", "options": ["GET"], "total": 1},
            }
        }
    )
    assert list(result) == [FolderConnectionKeys.VIDEOS]
    videos = result[FolderConnectionKeys.VIDEOS]
    assert videos.key is FolderConnectionKeys.VIDEOS
    assert videos.name == "videos"
    assert videos.uri == "/v"
    assert videos.options == ("GET",)
    assert videos.total == 3


def test_coercion_and_extra(target):
    result = target(FolderConnectionKeys)(
        {
            "connections": {
                "videos": {
                    "uri": "/v",
                    "options": ["GET", "POST"],
                    "total": "12",
                    "partner_total": 2,
                },
            }
        }
    )
    videos = result[FolderConnectionKeys.VIDEOS]
    assert videos.total == 12
    assert videos.extra == {"partner_total": 2}
    assert videos.allows("post")
    assert not videos.allows("DELETE")


def test_malformed_properties_are_dropped(target):
    result = target(FolderConnectionKeys)(
        {"connections": {"videos": {"uri": "/v", "total": "lots", "options": "GET"}}}
    )
    videos = result[FolderConnectionKeys.VIDEOS]
    assert videos.total is None
    assert videos.options == ()


@pytest.mark.parametrize(
    "metadata",
    [
        None,
        [],
        {},
        {"connections": None},
        {"connections": ["videos"]},
        {"connections": {"videos": "/v"}},
        {"connections": {"videos": {"options": ["GET"]}}},
        {"connections": {"videos": {"uri": ""}}},
        {"connections": {"videos": {"uri": 1}}},
    ],
)
def test_ignored(target, metadata):
    assert target(FolderConnectionKeys)(metadata) == {}


def test_per_key_class(target):
    from ..connections import Connection

    @dataclasses.dataclass(frozen=True)
    class NotesConnection(Connection):
        unread_total: typing.Optional[int] = None

    parser = target(NoteConnectionKeys, {NoteConnectionKeys.NOTES: NotesConnection})
    assert parser.class_for(NoteConnectionKeys.NOTES) is NotesConnection
    assert parser.class_for(NoteConnectionKeys.VIDEOS) is Connection

    result = parser(
        {
            "connections": {
                "notes": {"uri": "/n", "unread_total": "4"},
                "videos": {"uri": "/v", "unread_total": 1},
            }
        },
        JSONPointer("/metadata"),
    )
    notes = result[NoteConnectionKeys.NOTES]
    assert isinstance(notes, NotesConnection)
    assert notes.unread_total == 4
    videos = result[NoteConnectionKeys.VIDEOS]
    assert type(videos) is Connection
    assert videos.extra == {"unread_total": 1}


def test_build_connections():
    from ..connections import build_connections

    result = build_connections(
        {"connections": {"videos": {"uri": "/v"}, "albums": {"uri": "/a"}}}, FolderConnectionKeys
    )
    assert set(result) == {FolderConnectionKeys.VIDEOS}


def test_connections_of_model():
    from ..connections import connections
    from ..mapper import decode

    gadget = decode(
        {
            "uri": "/gadgets/1",
            "metadata": {"connections": {"owner": {"uri": "/owners/1"}}},
        },
        Gadget,
    )
    assert [c.uri for c in connections(gadget).values()] == ["/owners/1"]


def test_request():
    from ..connections import Connection

    connection = Connection(
        key=FolderConnectionKeys.VIDEOS, uri="/users/1/projects/2/videos?sort=date", total=5
    )
    request = connection.request(Owner, {"per_page": 10})
    assert request == Request(
        path="/users/1/projects/2/videos",
        model_type=Owner,
        parameters={"sort": "date", "per_page": 10},
        collection=True,
    )

    request = connection.request(Owner, collection=False)
    assert not request.collection
    assert dict(request.parameters) == {"sort": "date"}


def test_connection_is_immutable():
    from ..connections import Connection

    connection = Connection(key=FolderConnectionKeys.VIDEOS, uri="/v", extra={"a": 1})
    with pytest.raises(dataclasses.FrozenInstanceError):
        connection.uri = "/w"
    with pytest.raises(TypeError):
        connection.extra["a"] = 2


@pytest.mark.parametrize("total", ["Infinity", "-inf", "sNaN"])
def test_non_finite_total_is_dropped(total):
    from ..mapper import decode

    gadget = decode(
        {
            "uri": "/gadgets/1",
            "metadata": {"connections": {"parts": {"uri": "/gadgets/1/parts", "total": total}}},
        },
        Gadget,
    )
    assert gadget.connection("parts").total is None


def test_connection_is_hashable():
    from ..mapper import decode

    payload = {
        "uri": "/gadgets/1",
        "metadata": {
            "connections": {
                "parts": {"uri": "/gadgets/1/parts", "options": ["GET"], "tags": ["a"]},
            }
        },
    }
    a = decode(payload, Gadget).connection("parts")
    b = decode(payload, Gadget).connection("parts")
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
