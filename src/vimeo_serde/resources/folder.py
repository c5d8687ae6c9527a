import datetime
import enum
import typing

from ..declarative import Attr
from ..models import Model, date_of
from .user import User


class SlackLanguagePreference(enum.Enum):
    DE = "de-DE"
    EN = "en"
    ES = "es"
    FR = "fr-FR"
    JA = "ja-JP"
    KO = "ko-KR"
    PT = "pt-BR"


class SlackUserPreferences(enum.Enum):
    COLLECTION_CHANGE = "COLLECTION_CHANGE"
    PRIVACY_CHANGE = "PRIVACY_CHANGE"
    REVIEW_PAGE = "REVIEW_PAGE"
    VIDEO_DETAIL = "VIDEO_DETAIL"


class FolderConnectionKeys(enum.Enum):
    VIDEOS = "videos"


class Folder(Model):
    """
    A folder (project) that groups videos, optionally wired to a Slack channel.
    """

    SlackLanguagePreference = SlackLanguagePreference
    SlackUserPreferences = SlackUserPreferences
    ConnectionKeys = FolderConnectionKeys

    class Meta:
        attributes = {
            "created_time": Attr(datetime.datetime),
            "modified_time": Attr(datetime.datetime),
            "name": Attr(str),
            "resource_key": Attr(str),
            "slack_incoming_webhooks_id": Attr(int),
            "slack_integration_channel": Attr(str),
            "language_preference": Attr(SlackLanguagePreference),
            "user_preferences": Attr(typing.List[SlackUserPreferences]),
            "uri": Attr(str),
            "user": Attr(),
        }
        members_by_encoding_keys = {
            "slack_language_preference": "language_preference",
            "slack_user_preferences": "user_preferences",
        }
        classes_by_encoding_keys = {
            "user": User,
        }
        connection_keys = FolderConnectionKeys

    @property
    def created_date(self):
        return date_of(self.created_time)

    @property
    def modified_date(self):
        return date_of(self.modified_time)
