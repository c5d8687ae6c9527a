from .folder import Folder  # noqa
from .user import NotificationsConnection, User  # noqa
from .video import Video  # noqa
