import datetime
import enum

from ..declarative import Attr
from ..models import Model
from .user import User


class VideoStatus(enum.Enum):
    AVAILABLE = "available"
    UPLOADING = "uploading"
    TRANSCODING = "transcoding"
    UPLOADING_ERROR = "uploading_error"
    TRANSCODING_ERROR = "transcoding_error"
    QUOTA_EXCEEDED = "quota_exceeded"


class VideoConnectionKeys(enum.Enum):
    COMMENTS = "comments"
    CREDITS = "credits"
    LIKES = "likes"
    PICTURES = "pictures"
    RELATED = "related"
    TEXTTRACKS = "texttracks"


class Video(Model):
    Status = VideoStatus
    ConnectionKeys = VideoConnectionKeys

    class Meta:
        attributes = {
            "uri": Attr(str, required=True),
            "name": Attr(str),
            "description": Attr(str),
            "link": Attr(str),
            "duration": Attr(int),
            "width": Attr(int),
            "height": Attr(int),
            "language": Attr(str),
            "created_time": Attr(datetime.datetime),
            "modified_time": Attr(datetime.datetime),
            "release_time": Attr(datetime.datetime),
            "status": Attr(VideoStatus),
            "privacy": Attr(dict),
            "pictures": Attr(dict),
            "tags": Attr(list),
            "resource_key": Attr(str),
            "user": Attr(),
        }
        classes_by_encoding_keys = {
            "user": User,
        }
        connection_keys = VideoConnectionKeys

