from fastapi import Header

from supportbot.services.credentials import CredentialBundle, build_credentials


async def get_credentials(
    x_api_key: str | None = Header(default=None),
    x_index_id: str | None = Header(default=None),
    x_project_id: str | None = Header(default=None),
    x_organization_id: str | None = Header(default=None),
) -> CredentialBundle:
    return build_credentials(x_api_key, x_index_id, x_project_id, x_organization_id)
