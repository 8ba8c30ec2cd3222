import pytest

from supportbot.errors import ValidationError
from supportbot.services.credentials import build_credentials


def test_build_credentials_all_present():
    creds = build_credentials("key", "idx", "proj", "org")
    assert creds.auth_headers() == {
        "Authorization": "Bearer key",
        "X-Organization-Id": "org",
        "X-Project-Id": "proj",
    }
    assert creds.request_headers()["X-Index-ID"] == "idx"


@pytest.mark.parametrize(
    "values",
    [
        (None, "idx", "proj", "org"),
        ("key", "", "proj", "org"),
        ("key", "idx", "   ", "org"),
        ("key", "idx", "proj", None),
    ],
)
def test_build_credentials_rejects_missing(values):
    with pytest.raises(ValidationError) as excinfo:
        build_credentials(*values)
    assert excinfo.value.status_code == 400
