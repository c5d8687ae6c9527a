import dataclasses
import datetime
import enum
import typing

from ..connections import Connection
from ..declarative import Attr
from ..models import Model, date_of


class Account(enum.Enum):
    BASIC = "basic"
    PLUS = "plus"
    PRO = "pro"
    BUSINESS = "business"
    LIVE_PRO = "live_pro"
    LIVE_BUSINESS = "live_business"
    LIVE_PREMIUM = "live_premium"
    PRO_UNLIMITED = "pro_unlimited"
    PRODUCER = "producer"


class UserConnectionKeys(enum.Enum):
    ALBUMS = "albums"
    FOLDERS = "folders"
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    LIKES = "likes"
    NOTIFICATIONS = "notifications"
    VIDEOS = "videos"


@dataclasses.dataclass(frozen=True)
class NotificationsConnection(Connection):
    """
    The ``notifications`` connection of a user carries counters of its own.
    """

    new_total: typing.Optional[int] = None
    unread_total: typing.Optional[int] = None
    type_unseen_total: typing.Optional[typing.Dict[str, int]] = dataclasses.field(
        default=None, hash=False
    )


class User(Model):
    Account = Account
    ConnectionKeys = UserConnectionKeys

    class Meta:
        attributes = {
            "uri": Attr(str, required=True),
            "name": Attr(str),
            "link": Attr(str),
            "location": Attr(str),
            "bio": Attr(str),
            "account": Attr(Account),
            "created_time": Attr(datetime.datetime),
            "resource_key": Attr(str),
            "pictures": Attr(dict),
        }
        connection_keys = UserConnectionKeys
        connection_classes = {
            UserConnectionKeys.NOTIFICATIONS: NotificationsConnection,
        }

    @property
    def created_date(self):
        return date_of(self.created_time)
