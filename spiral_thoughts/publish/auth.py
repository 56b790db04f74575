"""
Google OAuth for publishing. Credentials are held in memory for the lifetime of the process;
no token file is written, so every new process runs the browser consent flow again.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import InstalledAppFlow

logger = logging.getLogger(__name__)

# Drive (files created by this app) + Sheets (append rows)
SCOPES = [
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/spreadsheets",
]


class Authenticator(ABC):
    """Supplies google-auth credentials for the Drive and Sheets clients."""

    @abstractmethod
    def credentials(self):
        """Return valid credentials, authenticating if needed."""
        ...


class InstalledAppAuthenticator(Authenticator):
    """Interactive installed-app flow reading a client secret JSON; cached per process."""

    def __init__(self, client_secret_path: Path, scopes: list[str] | None = None):
        self.client_secret_path = Path(client_secret_path)
        self.scopes = list(scopes or SCOPES)
        self._creds = None

    def credentials(self):
        creds = self._creds
        if creds is not None and creds.valid:
            return creds
        if creds is not None and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                return creds
            except RefreshError:
                # Token revoked / invalid_grant: fall back to full re-auth flow.
                logger.warning("OAuth refresh failed; re-running consent flow")
        if not self.client_secret_path.exists():
            raise FileNotFoundError(
                f"OAuth client secret not found: {self.client_secret_path}\n"
                "Create an OAuth desktop client in Google Cloud Console and save its JSON at this path."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(self.client_secret_path), scopes=self.scopes)
        # Force the account chooser so the right brand account is picked
        self._creds = flow.run_local_server(port=0, prompt="select_account")
        logger.info("Authenticated with Google (credentials cached for this process only)")
        return self._creds
