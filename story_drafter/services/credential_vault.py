"""
Sealing and unlocking of work-tracking credentials per project.

Credentials are JSON-encoded and encrypted with the credential cipher before
they reach the project store. Unlocked credentials live only in memory and are
dropped on lock().
"""
import json
import logging
import threading
from typing import Dict, Optional
from pydantic import ValidationError
from story_drafter.config import settings
from story_drafter.models.credentials import EncryptedCredentials, WorkTrackingCredentials
from story_drafter.services import credential_cipher

logger = logging.getLogger(__name__)


def seal_credentials(credentials: WorkTrackingCredentials, password: str) -> EncryptedCredentials:
    """
    Encrypt work-tracking credentials under a user password.

    Args:
        credentials: Plain credentials
        password: Password chosen by the user

    Returns:
        EncryptedCredentials to persist on the project record
    """
    if not password:
        raise ValueError("password cannot be empty")
    payload = credentials.model_dump_json(by_alias=True)
    return credential_cipher.encrypt(payload, password)


def unseal_credentials(sealed: EncryptedCredentials, password: str) -> Optional[WorkTrackingCredentials]:
    """
    Decrypt sealed credentials.

    Args:
        sealed: Stored encrypted credentials
        password: Password to try

    Returns:
        WorkTrackingCredentials, or None if the password is wrong or the
        payload is corrupt
    """
    plaintext = credential_cipher.decrypt(sealed.encrypted_data, password, sealed.salt)
    if plaintext is None:
        return None
    try:
        return WorkTrackingCredentials.model_validate(json.loads(plaintext))
    except (json.JSONDecodeError, ValidationError):
        logger.error("Decrypted credentials payload is not a valid credentials record")
        return None


def credentials_from_settings() -> Optional[WorkTrackingCredentials]:
    """
    Build default credentials from AZURE_DEVOPS_* environment settings.

    Returns:
        WorkTrackingCredentials, or None unless URL, token and project are all set
    """
    if not (settings.azure_devops_org_url and settings.azure_devops_pat and settings.azure_devops_project):
        return None
    return WorkTrackingCredentials(
        organization_url=settings.azure_devops_org_url,
        personal_access_token=settings.azure_devops_pat,
        project=settings.azure_devops_project,
    )


class CredentialVault:
    """In-memory store of unlocked credentials keyed by project id."""

    def __init__(self):
        self._unlocked: Dict[str, WorkTrackingCredentials] = {}
        self._lock = threading.Lock()

    def unlock(self, project_id: str, sealed: EncryptedCredentials, password: str) -> bool:
        """
        Unlock a project's credentials with a password.

        Returns:
            True if the password was correct and credentials are now available
        """
        credentials = unseal_credentials(sealed, password)
        if credentials is None:
            logger.info("Credential unlock rejected for project %s", project_id)
            return False
        with self._lock:
            self._unlocked[project_id] = credentials
        logger.info("Credentials unlocked for project %s", project_id)
        return True

    def get(self, project_id: str) -> Optional[WorkTrackingCredentials]:
        with self._lock:
            return self._unlocked.get(project_id)

    def is_unlocked(self, project_id: str) -> bool:
        with self._lock:
            return project_id in self._unlocked

    def lock(self, project_id: str) -> None:
        """Forget a project's unlocked credentials."""
        with self._lock:
            self._unlocked.pop(project_id, None)
        logger.info("Credentials locked for project %s", project_id)
