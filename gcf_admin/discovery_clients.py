"""Helpers that construct authenticated Google API service clients.

All service objects go through `googleapiclient.discovery.build` here so the
user agent, scopes and discovery-cache settings stay consistent.
"""
from typing import Optional, Tuple

import google.auth
import google_auth_httplib2
import httplib2
from google.auth.credentials import Credentials
from googleapiclient import discovery
from googleapiclient.http import set_user_agent

from . import __version__

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
DEFAULT_USER_AGENT = f"gcf-admin/{__version__}"


def default_credentials() -> Tuple[Credentials, Optional[str]]:
    """Application Default Credentials with the cloud-platform scope."""
    return google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])


def authorized_http(credentials: Credentials, user_agent: str) -> google_auth_httplib2.AuthorizedHttp:
    http = google_auth_httplib2.AuthorizedHttp(credentials, http=httplib2.Http())
    return set_user_agent(http, user_agent)


def cloudfunctions_v1(credentials: Credentials, user_agent: str = DEFAULT_USER_AGENT):
    """Cloud Functions v1 service client."""
    return discovery.build("cloudfunctions", "v1", http=authorized_http(credentials, user_agent),
                           cache_discovery=False)


def serviceusage_v1(credentials: Credentials, user_agent: str = DEFAULT_USER_AGENT):
    """Service Usage v1 service client."""
    return discovery.build("serviceusage", "v1", http=authorized_http(credentials, user_agent),
                           cache_discovery=False)
