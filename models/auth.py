from datetime import timezone

import httplib2
from oauth2client import GOOGLE_TOKEN_URI
from oauth2client.client import (
    AccessTokenRefreshError,
    FlowExchangeError,
    OAuth2Credentials,
    OAuth2WebServerFlow,
)

from models.errors import NotAuthenticated, UpstreamError
from models.metrics import log_token_refresh
from models.state import CredentialSet

# Read-only access to Google Sheets
SCOPES = ['https://www.googleapis.com/auth/spreadsheets.readonly']
USER_AGENT = 'roster-board'
DEFAULT_TOKEN_TYPE = 'Bearer'


def _as_utc(expiry):
    """oauth2client hands out naive UTC datetimes"""
    if expiry.tzinfo is None:
        return expiry.replace(tzinfo=timezone.utc)
    return expiry.astimezone(timezone.utc)


def _credential_set_from(oauth_creds, fallback_refresh_token=None):
    """Convert oauth2client credentials to a CredentialSet, or None if anything is missing"""
    refresh_token = oauth_creds.refresh_token or fallback_refresh_token
    token_response = oauth_creds.token_response or {}
    if not oauth_creds.access_token or not refresh_token or oauth_creds.token_expiry is None:
        return None
    return CredentialSet(
        access_token=oauth_creds.access_token,
        refresh_token=refresh_token,
        token_type=token_response.get('token_type') or DEFAULT_TOKEN_TYPE,
        expiry=_as_utc(oauth_creds.token_expiry),
    )


class TokenManager:
    """
    Holds the current Google credentials and keeps them fresh.

    Unauthenticated until complete_authorization() succeeds (or a saved token
    set was loaded at startup). ensure_fresh() refreshes on every call; a
    failed refresh keeps the old token so the caller can still try its read.
    """

    def __init__(self, settings, state, store):
        self._settings = settings
        self._state = state
        self._store = store

    @property
    def credentials(self):
        return self._state.credentials

    @property
    def is_authenticated(self):
        return self._state.credentials is not None

    def _http(self):
        return httplib2.Http(timeout=self._settings.http_timeout)

    def _flow(self):
        return OAuth2WebServerFlow(
            client_id=self._settings.client_id,
            client_secret=self._settings.client_secret,
            scope=SCOPES,
            redirect_uri=self._settings.redirect_uri,
            user_agent=USER_AGENT,
            prompt='consent',
        )

    def authorization_url(self, state=None):
        """Google consent page URL (offline access so we get a refresh token)"""
        return self._flow().step1_get_authorize_url(state=state)

    def complete_authorization(self, code):
        """Exchange an authorization code and store the resulting token set"""
        try:
            oauth_creds = self._flow().step2_exchange(code=code, http=self._http())
        except (FlowExchangeError, httplib2.HttpLib2Error, OSError) as e:
            print(f"[AUTH] ❌ Code exchange failed: {e}")
            raise UpstreamError(e, f"Authorization code exchange failed: {e}") from e

        credentials = _credential_set_from(oauth_creds)
        if credentials is None:
            raise UpstreamError(
                ValueError('token response is missing a refresh token or expiry'),
                "Google returned an incomplete token set. Revoke access and log in again.",
            )

        self._set_credentials(credentials)
        print("[AUTH] ✅ Authorization complete")
        return credentials

    def ensure_fresh(self):
        """
        Refresh the access token unconditionally and return the current set.
        Raises NotAuthenticated if no tokens have been issued yet.
        """
        current = self._state.credentials
        if current is None:
            raise NotAuthenticated()

        oauth_creds = OAuth2Credentials(
            current.access_token,
            self._settings.client_id,
            self._settings.client_secret,
            current.refresh_token,
            current.expiry.astimezone(timezone.utc).replace(tzinfo=None),
            GOOGLE_TOKEN_URI,
            USER_AGENT,
            token_response={'token_type': current.token_type},
        )
        try:
            oauth_creds.refresh(self._http())
        except (AccessTokenRefreshError, httplib2.HttpLib2Error, OSError) as e:
            log_token_refresh(error=e)
            return current

        refreshed = _credential_set_from(oauth_creds, fallback_refresh_token=current.refresh_token)
        if refreshed is None:
            log_token_refresh(error='refresh response was incomplete')
            return current

        self._set_credentials(refreshed)
        log_token_refresh()
        return refreshed

    def _set_credentials(self, credentials):
        self._state.credentials = credentials
        self._store.save_async(self._state)
