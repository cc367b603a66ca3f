from member_grid.clients.members_sdk.config import SDKConfig
from member_grid.clients.members_sdk.errors import ApiError
from member_grid.clients.members_sdk.http_client import HttpClient
from member_grid.clients.members_sdk.members_client import MembersClient
from member_grid.clients.members_sdk.normalizers import normalize_listing

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "MembersClient",
    "normalize_listing",
]
