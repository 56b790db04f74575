"""
Drive upload + Sheets append against mocked Google clients; OAuth caching.
"""
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError
from oauthlib.oauth2.rfc6749.errors import AccessDeniedError

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spiral_thoughts.config import _defaults, _merge
from spiral_thoughts.publish import GooglePublisher, InstalledAppAuthenticator, UploadError


def _http_error() -> HttpError:
    return HttpError(resp=MagicMock(status=500, reason="boom"), content=b"boom")


class TestGooglePublisher(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.png = Path(self.tmp.name) / "gradient_Spiral_palette_10x10_20260102030405.png"
        self.png.write_bytes(b"\x89PNG fake")
        self.drive = MagicMock()
        self.sheets = MagicMock()
        self.drive.files.return_value.create.return_value.execute.return_value = {"id": "abc123"}
        patcher = patch("spiral_thoughts.publish.google.MediaFileUpload")
        self.media = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self.tmp.cleanup()

    def _publisher(self, folder_id=None) -> GooglePublisher:
        return GooglePublisher(
            MagicMock(), "sheet-id", "DevWithSwap",
            folder_id=folder_id, drive=self.drive, sheets=self.sheets,
        )

    def test_upload_returns_public_url_and_grants_read(self):
        url = self._publisher().upload_image(self.png)
        self.assertEqual(url, "https://drive.google.com/uc?id=abc123")
        _, kwargs = self.drive.files.return_value.create.call_args
        self.assertEqual(kwargs["body"], {"name": self.png.name})
        self.assertEqual(kwargs["fields"], "id")
        self.drive.permissions.return_value.create.assert_called_once_with(
            fileId="abc123", body={"type": "anyone", "role": "reader"},
        )
        self.assertEqual(self.media.call_args.kwargs["mimetype"], "image/png")

    def test_upload_into_folder(self):
        self._publisher(folder_id="folder-1").upload_image(self.png)
        _, kwargs = self.drive.files.return_value.create.call_args
        self.assertEqual(kwargs["body"]["parents"], ["folder-1"])

    def test_missing_file_id(self):
        self.drive.files.return_value.create.return_value.execute.return_value = {}
        with self.assertRaises(UploadError) as cm:
            self._publisher().upload_image(self.png)
        self.assertEqual(cm.exception.path, self.png)

    def test_http_error_becomes_upload_error(self):
        self.drive.files.return_value.create.return_value.execute.side_effect = _http_error()
        with self.assertRaises(UploadError):
            self._publisher().upload_image(self.png)

    def test_connection_failure_becomes_upload_error(self):
        self.drive.files.return_value.create.return_value.execute.side_effect = httplib2.ServerNotFoundError(
            "Unable to find the server at www.googleapis.com"
        )
        with self.assertRaises(UploadError) as cm:
            self._publisher().upload_image(self.png)
        self.assertIn("Unable to find the server", str(cm.exception))

    def test_permission_connection_failure(self):
        self.drive.permissions.return_value.create.return_value.execute.side_effect = httplib2.HttpLib2Error("reset")
        with self.assertRaises(UploadError):
            self._publisher().upload_image(self.png)

    def test_auth_failures_become_upload_errors(self):
        for error in (TransportError("no route"), RefreshError("invalid_grant"), AccessDeniedError()):
            auth = MagicMock()
            auth.credentials.side_effect = error
            publisher = GooglePublisher(auth, "sheet-id", "Tab")
            with self.assertRaises(UploadError, msg=repr(error)):
                publisher.upload_image(self.png)
            with self.assertRaises(UploadError, msg=repr(error)):
                publisher.append_row("img.png", "t", "https://x")

    def test_append_row(self):
        self._publisher().append_row("img.png", "a thought", "https://x")
        append = self.sheets.spreadsheets.return_value.values.return_value.append
        append.assert_called_once_with(
            spreadsheetId="sheet-id",
            range="DevWithSwap!A:C",
            valueInputOption="USER_ENTERED",
            body={"values": [["img.png", "a thought", "https://x"]]},
        )

    def test_append_http_error(self):
        append = self.sheets.spreadsheets.return_value.values.return_value.append
        append.return_value.execute.side_effect = _http_error()
        with self.assertRaises(UploadError):
            self._publisher().append_row("img.png", "t", "https://x")

    def test_save_image(self):
        link = self._publisher().save_image(self.png, "a thought")
        self.assertEqual(link, "https://drive.google.com/uc?id=abc123")
        append = self.sheets.spreadsheets.return_value.values.return_value.append
        self.assertEqual(append.call_args.kwargs["body"]["values"][0][0], self.png.name)

    def test_save_missing_image_is_skipped(self):
        with self.assertLogs("spiral_thoughts.publish.google", level="ERROR"):
            result = self._publisher().save_image(Path(self.tmp.name) / "nope.png", "t")
        self.assertIsNone(result)
        self.drive.files.assert_not_called()

    def test_services_built_lazily(self):
        auth = MagicMock()
        with patch("spiral_thoughts.publish.google.build") as build:
            publisher = GooglePublisher(auth, "sheet-id", "Tab")
            build.assert_not_called()
            _ = publisher.drive
            _ = publisher.drive
        build.assert_called_once()
        self.assertEqual(build.call_args.args[:2], ("drive", "v3"))


class TestFromConfig(unittest.TestCase):

    def _config(self, brand):
        return _merge(_defaults(), {
            "publish": {"brand": brand, "folder_id": "f"},
            "brands": {"DevWithSwap": {"spreadsheet_id": "sid", "sheet_name": "DevWithSwap"}},
        })

    def test_known_brand(self):
        publisher = GooglePublisher.from_config(self._config("DevWithSwap"), authenticator=MagicMock())
        self.assertEqual(publisher.spreadsheet_id, "sid")
        self.assertEqual(publisher.sheet_name, "DevWithSwap")
        self.assertEqual(publisher.folder_id, "f")

    def test_unknown_brand(self):
        with self.assertRaises(ValueError):
            GooglePublisher.from_config(self._config("Nobody"), authenticator=MagicMock())


class TestInstalledAppAuthenticator(unittest.TestCase):

    def test_missing_client_secret(self):
        auth = InstalledAppAuthenticator(Path(tempfile.gettempdir()) / "does-not-exist.json")
        with self.assertRaises(FileNotFoundError):
            auth.credentials()

    def test_consent_flow_runs_once_per_process(self):
        with tempfile.TemporaryDirectory() as tmp:
            secret = Path(tmp) / "credentials.json"
            secret.write_text("{}", encoding="utf-8")
            with patch("spiral_thoughts.publish.auth.InstalledAppFlow") as flow_cls:
                creds = MagicMock(valid=True)
                flow_cls.from_client_secrets_file.return_value.run_local_server.return_value = creds
                auth = InstalledAppAuthenticator(secret)
                self.assertIs(auth.credentials(), creds)
                self.assertIs(auth.credentials(), creds)
            flow_cls.from_client_secrets_file.assert_called_once()
            flow_cls.from_client_secrets_file.return_value.run_local_server.assert_called_once_with(
                port=0, prompt="select_account",
            )


if __name__ == "__main__":
    unittest.main()
