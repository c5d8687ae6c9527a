import datetime
import decimal
import enum
import typing

import pytest

from ..utils import Absent


class SlackUserPreference(enum.Enum):
    COLLECTION_CHANGE = "COLLECTION_CHANGE"
    PRIVACY_CHANGE = "PRIVACY_CHANGE"
    REVIEW_PAGE = "REVIEW_PAGE"
    VIDEO_DETAIL = "VIDEO_DETAIL"


class TestCoerceEnum:
    @pytest.fixture
    def target(self):
        from ..converters import coerce_enum

        return coerce_enum

    def test_known(self, target):
        assert target(SlackUserPreference, "REVIEW_PAGE") is SlackUserPreference.REVIEW_PAGE

    def test_member(self, target):
        assert (
            target(SlackUserPreference, SlackUserPreference.REVIEW_PAGE)
            is SlackUserPreference.REVIEW_PAGE
        )

    @pytest.mark.parametrize("raw", ["review_page", "", None, 1, ["REVIEW_PAGE"]])
    def test_unknown(self, target, raw):
        assert target(SlackUserPreference, raw) is None


def test_coerce_enum_list():
    from ..converters import coerce_enum_list

    assert coerce_enum_list(
        SlackUserPreference, ["COLLECTION_CHANGE", "BOGUS", "PRIVACY_CHANGE"]
    ) == [SlackUserPreference.COLLECTION_CHANGE, SlackUserPreference.PRIVACY_CHANGE]
    assert coerce_enum_list(SlackUserPreference, ["BOGUS"]) == []
    assert coerce_enum_list(SlackUserPreference, []) == []


class TestParseTimestamp:
    @pytest.fixture
    def target(self):
        from ..converters import parse_timestamp

        return parse_timestamp

    def test_zulu(self, target):
        assert target("2019-01-01T00:00:00Z") == datetime.datetime(
            2019, 1, 1, tzinfo=datetime.timezone.utc
        )

    def test_offset(self, target):
        result = target("2019-01-01T09:00:00+09:00")
        assert result == datetime.datetime(2019, 1, 1, tzinfo=datetime.timezone.utc)
        assert result.utcoffset() == datetime.timedelta(hours=9)

    def test_naive(self, target):
        assert target("2019-01-01T00:00:00").tzinfo is datetime.timezone.utc

    def test_malformed(self, target):
        with pytest.raises(ValueError):
            target("yesterday")


class TestConvert:
    @pytest.fixture
    def target(self):
        from ..converters import convert

        return convert

    @pytest.mark.parametrize(
        ("typ", "value", "expected"),
        [
            (int, 1, 1),
            (int, "12", 12),
            (int, 3.0, 3),
            (float, 1, 1.0),
            (float, "0.25", 0.25),
            (decimal.Decimal, "1.10", decimal.Decimal("1.10")),
            (bool, True, True),
            (bool, "false", False),
            (bool, 1, True),
            (str, "abc", "abc"),
            (str, 12, "12"),
            (datetime.date, "2019-01-02", datetime.date(2019, 1, 2)),
            (datetime.date, "2019-01-02T23:00:00Z", datetime.date(2019, 1, 2)),
            (typing.Optional[int], "7", 7),
            (typing.List[int], [1, "2"], [1, 2]),
            (typing.Sequence[str], ["a"], ["a"]),
        ],
    )
    def test_scalars(self, target, typ, value, expected):
        assert target(typ, value) == expected

    @pytest.mark.parametrize(
        ("typ", "value"),
        [
            (int, "twelve"),
            (int, 1.5),
            (int, True),
            (float, "x"),
            (bool, "yes"),
            (str, True),
            (str, {"a": 1}),
            (datetime.datetime, 0),
            (typing.List[int], "12"),
            (dict, [1]),
            (list, "abc"),
            (int, "Infinity"),
            (int, "-inf"),
            (int, float("inf")),
            (int, "NaN"),
            (int, "sNaN"),
            (float, "Infinity"),
            (float, float("nan")),
            (decimal.Decimal, "sNaN"),
        ],
    )
    def test_malformed(self, target, typ, value):
        with pytest.raises((ValueError, TypeError)):
            target(typ, value)

    def test_none(self, target):
        assert target(int, None) is None
        assert target(SlackUserPreference, None) is None

    def test_enum(self, target):
        assert target(SlackUserPreference, "VIDEO_DETAIL") is SlackUserPreference.VIDEO_DETAIL
        assert target(SlackUserPreference, "NOPE") is Absent
        assert target(typing.List[SlackUserPreference], ["NOPE", "VIDEO_DETAIL"]) == [
            SlackUserPreference.VIDEO_DETAIL
        ]

    def test_opaque_is_copied(self, target):
        value = {"sizes": [{"width": 100}]}
        result = target(dict, value)
        assert result == value
        result["sizes"][0]["width"] = 200
        assert value["sizes"][0]["width"] == 100

    def test_unsupported(self, target):
        with pytest.raises(TypeError):
            target(complex, 1)


def test_is_supported_type():
    from ..converters import is_supported_type

    assert is_supported_type(int)
    assert is_supported_type(typing.Optional[datetime.datetime])
    assert is_supported_type(typing.List[SlackUserPreference])
    assert is_supported_type(typing.Dict[str, int])
    assert is_supported_type(typing.Any)
    assert not is_supported_type(complex)
    assert not is_supported_type(typing.List[complex])
