from __future__ import annotations

from dataclasses import replace

from supportbot.errors import ValidationError
from supportbot.services.credentials import CredentialBundle


class CredentialSession:
    """Credentials for one logged-in user; set at login, dropped at logout."""

    def __init__(self) -> None:
        self._credentials: CredentialBundle | None = None

    @property
    def is_logged_in(self) -> bool:
        return self._credentials is not None

    def login(self, api_key: str, project_id: str, organization_id: str, index_id: str = "") -> None:
        if not (api_key and project_id and organization_id):
            raise ValidationError("API key, project id and organization id are required")
        self._credentials = CredentialBundle(
            api_key=api_key,
            index_id=index_id,
            project_id=project_id,
            organization_id=organization_id,
        )

    def set_index_id(self, index_id: str) -> None:
        if self._credentials is None:
            raise ValidationError("Not logged in")
        self._credentials = replace(self._credentials, index_id=index_id)

    def require(self) -> CredentialBundle:
        if self._credentials is None:
            raise ValidationError("Not logged in")
        return self._credentials

    def headers(self, include_index: bool = True) -> dict[str, str]:
        headers = self.require().request_headers()
        if not include_index:
            headers.pop("X-Index-ID")
        return headers

    def clear(self) -> None:
        self._credentials = None
