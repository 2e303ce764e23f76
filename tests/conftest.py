"""
SkillChain - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, List, Tuple

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Set testing environment before the settings object is built
os.environ['ENVIRONMENT'] = 'testing'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only-0123456789'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['MAIL_BACKEND'] = 'console'
os.environ['LOG_FORMAT'] = 'console'
os.environ['SENTRY_DSN'] = ''

from app.main import app
from app.api import deps
from app.core.security import create_access_token
from app.db.session import check_database, create_indexes, get_db
from app.models.otp import OtpPurpose
from app.services.email_service import MailSender

fake = Faker()

STRONG_PASSWORD = 'Secret1!'


class RecordingMailSender(MailSender):
    """Keeps every code it is asked to send."""

    def __init__(self):
        self.sent: List[Tuple[str, str, OtpPurpose]] = []

    async def send_code(self, to_email: str, code: str, purpose: OtpPurpose) -> None:
        self.sent.append((to_email, code, purpose))

    def last_code(self, email: str = None) -> str:
        for to_email, code, _ in reversed(self.sent):
            if email is None or to_email == email.lower():
                return code
        raise AssertionError(f"No code was sent to {email}")


@pytest.fixture
async def db():
    """Fresh in-memory database per test, with the production indexes."""
    client = AsyncMongoMockClient()
    database = client[f"skillchain_test_{fake.uuid4().replace('-', '')}"]
    await create_indexes(database)
    yield database


@pytest.fixture
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
async def client(db, mail_sender) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and mail overrides"""
    async def override_get_db():
        return db

    async def override_check_database():
        return True

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[check_database] = override_check_database
    app.dependency_overrides[deps.get_mail_sender] = lambda: mail_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def student_data() -> dict:
    return {
        'role': 'STUDENT',
        'name': fake.name(),
        'email': fake.unique.email(),
        'password': STRONG_PASSWORD,
        'phone': '+91 98765 43210',
        'apparId': f"APPAR-{fake.unique.random_int(1000, 9999)}",
    }


@pytest.fixture
async def registered_user(client: AsyncClient, student_data: dict) -> dict:
    """A pending student; returns the registration payload plus userId."""
    response = await client.post('/api/auth/register', json=student_data)
    assert response.status_code == 201
    return {**student_data, 'userId': response.json()['userId']}


@pytest.fixture
async def active_user(client: AsyncClient, registered_user: dict, mail_sender: RecordingMailSender) -> dict:
    """A verified student; adds the session token."""
    response = await client.post(
        '/api/auth/verify-otp',
        json={'userId': registered_user['userId'], 'code': mail_sender.last_code(registered_user['email'])},
    )
    assert response.status_code == 200
    return {**registered_user, 'token': response.json()['token']}


def auth_headers_for(role: str, user_id: str = None) -> dict:
    token = create_access_token(user_id or fake.uuid4(), role)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def institute_headers() -> dict:
    return auth_headers_for('INSTITUTE')


@pytest.fixture
def admin_headers() -> dict:
    return auth_headers_for('ADMIN')


@pytest.fixture
def student_headers() -> dict:
    return auth_headers_for('STUDENT')


@pytest.fixture
def company_headers() -> dict:
    return auth_headers_for('COMPANY')


@pytest.fixture
def certificate_data() -> dict:
    return {
        'certificateId': f"crt-{fake.unique.random_int(10**12, 10**13)}",
        'studentName': fake.name(),
        'studentApparId': 'APPAR-2023-992',
        'courseName': 'Distributed Systems',
        'grade': 'A',
        'issuerName': 'Tech Institute of India',
        'issueDate': '2024-05-01',
        'ipfsCid': 'QmTestCid123',
        'blockchainTx': '0xabc123',
        'isValid': True,
    }
