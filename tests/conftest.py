import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm


class AccidentalDatabaseAccessError(Exception):
    """Raised when a unit test accidentally tries to access the database."""

    pass


def _raise_db_access_error(*args, **kwargs):
    """Raise an error when DB access is attempted in unit tests."""
    raise AccidentalDatabaseAccessError(
        "Unit test attempted to connect to the database! "
        "Either mock the database call with @patch('vidhost.app.routers.videos.list_videos') "
        "or similar, or mark this test as @pytest.mark.e2e if it requires real DB access."
    )


@pytest.fixture(autouse=True)
def prevent_db_access_in_unit_tests(request, monkeypatch):
    """Prevent accidental database access in unit tests.

    For e2e and integration tests this does nothing. For all other tests it
    patches psycopg.connect to raise a clear error if any code path tries to
    reach the database without proper mocking.
    """
    markers = [marker.name for marker in request.node.iter_markers()]
    if "e2e" in markers or "integration" in markers:
        yield
        return

    monkeypatch.setattr("psycopg.connect", _raise_db_access_error)
    yield


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """An RSA key pair shared by the signing tests (generation is slow)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_jwk(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """The private key as JWK JSON."""
    return RSAAlgorithm.to_jwk(rsa_private_key)


@pytest.fixture(scope="session")
def rsa_private_jwk_b64(rsa_private_jwk: str) -> str:
    """The private key as base64-encoded JWK, the platform's format."""
    return base64.b64encode(rsa_private_jwk.encode("utf-8")).decode("ascii")
