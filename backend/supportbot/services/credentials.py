from dataclasses import dataclass

from supportbot.errors import ValidationError


@dataclass(frozen=True)
class CredentialBundle:
    api_key: str
    index_id: str
    project_id: str
    organization_id: str

    def auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-Organization-Id": self.organization_id,
            "X-Project-Id": self.project_id,
        }

    def request_headers(self) -> dict[str, str]:
        """Headers this service itself expects from callers."""
        return {
            "X-API-Key": self.api_key,
            "X-Index-ID": self.index_id,
            "X-Project-ID": self.project_id,
            "X-Organization-ID": self.organization_id,
        }


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def build_credentials(
    api_key: str | None,
    index_id: str | None,
    project_id: str | None,
    organization_id: str | None,
) -> CredentialBundle:
    if not all(_present(v) for v in (api_key, index_id, project_id, organization_id)):
        raise ValidationError("Missing required headers")
    return CredentialBundle(
        api_key=api_key,
        index_id=index_id,
        project_id=project_id,
        organization_id=organization_id,
    )
