"""Foursquare API异步客户端"""

from foursquare.core.client import FoursquareClient
from foursquare.core.config import Settings, get_settings
from foursquare.core.logging import setup_logging
from foursquare.features.users import UserService
from foursquare.main import Foursquare, create_foursquare
from foursquare.shared.exceptions import FoursquareError, MissingArgumentError, UpstreamError
from foursquare.shared.schemas import Aspect

__version__ = "0.1.0"

__all__ = [
    "Aspect",
    "Foursquare",
    "FoursquareClient",
    "FoursquareError",
    "MissingArgumentError",
    "Settings",
    "UpstreamError",
    "UserService",
    "create_foursquare",
    "get_settings",
    "setup_logging",
]
