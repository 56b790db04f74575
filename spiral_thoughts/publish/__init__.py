# Publishing: Google Drive upload + Sheets log (optional, outside the render core)

from .auth import Authenticator, InstalledAppAuthenticator, SCOPES
from ..errors import UploadError
from .google import SERVICE_ERRORS, GooglePublisher

__all__ = [
    "Authenticator",
    "InstalledAppAuthenticator",
    "SCOPES",
    "GooglePublisher",
    "SERVICE_ERRORS",
    "UploadError",
]
