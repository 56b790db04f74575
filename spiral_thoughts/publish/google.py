"""
Publish a rendered PNG: upload to Google Drive, make it public-read, append
(image name, thought, link) to the brand's sheet tab.
"""
import logging
from pathlib import Path
from typing import Any

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from ..config import get_brand, resolve_project_path
from ..errors import UploadError
from .auth import Authenticator, InstalledAppAuthenticator

logger = logging.getLogger(__name__)

PUBLIC_URL = "https://drive.google.com/uc?id={file_id}"

# API status errors, httplib2 connection/DNS failures, token refresh and consent failures
SERVICE_ERRORS = (HttpError, httplib2.HttpLib2Error, GoogleAuthError, OAuth2Error)


class GooglePublisher:
    """
    Drive + Sheets client for one brand. Services are built lazily on first use so that
    authentication happens once per process and only when something is published.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        spreadsheet_id: str,
        sheet_name: str,
        *,
        folder_id: str | None = None,
        drive: Any = None,
        sheets: Any = None,
    ):
        self.authenticator = authenticator
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self.folder_id = folder_id
        self._drive = drive
        self._sheets = sheets

    @classmethod
    def from_config(cls, config: dict[str, Any], authenticator: Authenticator | None = None) -> "GooglePublisher":
        """Resolve the brand (ValueError if unknown) and the client secret path from config."""
        pub = config.get("publish", {})
        brand = get_brand(config, pub.get("brand") or "")
        if authenticator is None:
            authenticator = InstalledAppAuthenticator(resolve_project_path(pub.get("client_secret") or "credentials.json"))
        return cls(
            authenticator,
            brand["spreadsheet_id"],
            brand["sheet_name"],
            folder_id=pub.get("folder_id") or None,
        )

    @property
    def drive(self):
        if self._drive is None:
            self._drive = build("drive", "v3", credentials=self.authenticator.credentials(), cache_discovery=False)
        return self._drive

    @property
    def sheets(self):
        if self._sheets is None:
            self._sheets = build("sheets", "v4", credentials=self.authenticator.credentials(), cache_discovery=False)
        return self._sheets

    def upload_image(self, file_path: Path) -> str:
        """Upload a PNG, grant anyone-reader, return its public URL. Raises UploadError."""
        file_path = Path(file_path)
        body: dict[str, Any] = {"name": file_path.name}
        if self.folder_id:
            body["parents"] = [self.folder_id]
        media = MediaFileUpload(str(file_path), mimetype="image/png", resumable=True)
        try:
            created = self.drive.files().create(body=body, media_body=media, fields="id").execute()
        except SERVICE_ERRORS as e:
            raise UploadError(f"Upload failed for {file_path.name}: {e}", path=file_path) from e
        file_id = (created or {}).get("id")
        if not file_id:
            raise UploadError(f"Upload failed for {file_path.name}: no file id in response", path=file_path)
        try:
            self.drive.permissions().create(
                fileId=file_id,
                body={"type": "anyone", "role": "reader"},
            ).execute()
        except SERVICE_ERRORS as e:
            raise UploadError(f"Could not make {file_path.name} public: {e}", path=file_path) from e
        return PUBLIC_URL.format(file_id=file_id)

    def append_row(self, image_name: str, thought: str, link: str) -> None:
        """Append one row to <sheet>!A:C; values are parsed as if typed (USER_ENTERED)."""
        try:
            self.sheets.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=f"{self.sheet_name}!A:C",
                valueInputOption="USER_ENTERED",
                body={"values": [[image_name, thought, link]]},
            ).execute()
        except SERVICE_ERRORS as e:
            raise UploadError(f"Sheet append failed for {image_name}: {e}") from e

    def save_image(self, image_path: Path, thought: str) -> str | None:
        """
        Upload + log to the sheet. A missing file is logged and skipped (returns None);
        upload and append failures raise UploadError.
        """
        image_path = Path(image_path)
        if not image_path.is_file():
            logger.error("Image not found: %s", image_path)
            return None
        link = self.upload_image(image_path)
        self.append_row(image_path.name, thought, link)
        logger.info("Uploaded: %s -> %s", image_path.name, link)
        return link
