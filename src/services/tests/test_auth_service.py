"""Unit tests for AuthService: register, login, token resolution."""

import unittest
from datetime import date, timedelta
from unittest.mock import MagicMock

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    BadSignatureError,
    DuplicateError,
    InvalidCredentialsError,
    PersistenceError,
    ServerError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError,
)
from domain.model.user import Address, PublicUser
from services.auth_service import AuthService
from services.password_hasher import PasswordHasher
from services.token_issuer import TokenIssuer

SECRET = 'test-secret-key'


class AuthServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.hasher = PasswordHasher(rounds=4)
        self.issuer = TokenIssuer(SECRET)
        self.service = AuthService(self.repo, self.hasher, self.issuer)

    def register_default(self, **kwargs):
        params = dict(
            email='ada@example.com',
            password='Secret123',
            first_name='Ada',
            last_name='Lovelace',
        )
        params.update(kwargs)
        return self.service.register(**params)


class TestRegister(AuthServiceTestCase):

    def test_register_returns_token_and_public_user(self):
        result = self.register_default()

        self.assertIsInstance(result.user, PublicUser)
        self.assertEqual(result.user.email, 'ada@example.com')
        self.assertEqual(result.user.credit_score, 300)
        self.assertEqual(result.user.credit_history, [])
        self.assertEqual(self.issuer.verify(result.token), result.user.id)

    def test_register_persists_hashed_password(self):
        result = self.register_default()

        stored = self.repo.get_by_id(result.user.id)
        self.assertNotEqual(stored.password_hash, 'Secret123')
        self.assertTrue(self.hasher.verify('Secret123', stored.password_hash))

    def test_register_public_user_has_no_hash(self):
        result = self.register_default()
        self.assertFalse(hasattr(result.user, 'password_hash'))

    def test_register_normalizes_email(self):
        result = self.register_default(email='  Ada@Example.COM ')
        self.assertEqual(result.user.email, 'ada@example.com')

    def test_register_keeps_optional_profile_fields(self):
        result = self.register_default(
            phone_number='555-0100',
            date_of_birth=date(1990, 12, 10),
            address=Address(street='1 Main St', city='Springfield', state='IL', zip_code='62701'),
        )

        self.assertEqual(result.user.phone_number, '555-0100')
        self.assertEqual(result.user.date_of_birth, date(1990, 12, 10))
        self.assertEqual(result.user.address.zip_code, '62701')

    def test_register_missing_fields(self):
        cases = [
            dict(email=None),
            dict(email='   '),
            dict(password=''),
            dict(password=None),
            dict(first_name=''),
            dict(last_name=None),
        ]
        for override in cases:
            with self.subTest(override=override):
                with self.assertRaises(ValidationError) as ctx:
                    self.register_default(**override)
                self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.repo.store, {})

    def test_register_rejects_overlong_password(self):
        with self.assertRaises(ValidationError):
            self.register_default(password='x' * 73)

    def test_register_duplicate_email(self):
        self.register_default()

        with self.assertRaises(DuplicateError) as ctx:
            self.register_default(email='ADA@example.com', first_name='Other')

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, 'User already exists with this email.')
        self.assertEqual(len(self.repo.store), 1)

    def test_register_wraps_persistence_failure(self):
        repo = MagicMock()
        repo.get_by_email.return_value = None
        repo.create.side_effect = PersistenceError('connection reset by mongod')
        service = AuthService(repo, self.hasher, self.issuer)

        with self.assertRaises(ServerError) as ctx:
            service.register('ada@example.com', 'Secret123', 'Ada', 'Lovelace')

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, 'Server error during registration.')
        self.assertNotIn('mongod', ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__, PersistenceError)

    def test_register_race_on_create_stays_duplicate(self):
        repo = MagicMock()
        repo.get_by_email.return_value = None
        repo.create.side_effect = DuplicateError('User already exists with this email.')
        service = AuthService(repo, self.hasher, self.issuer)

        with self.assertRaises(DuplicateError):
            service.register('ada@example.com', 'Secret123', 'Ada', 'Lovelace')


class TestLogin(AuthServiceTestCase):

    def setUp(self):
        super().setUp()
        self.registered = self.register_default()

    def test_login_success(self):
        result = self.service.login('ada@example.com', 'Secret123')

        self.assertEqual(result.user.id, self.registered.user.id)
        self.assertEqual(self.issuer.verify(result.token), self.registered.user.id)
        self.assertFalse(hasattr(result.user, 'password_hash'))

    def test_login_email_is_case_insensitive(self):
        result = self.service.login('ADA@EXAMPLE.COM', 'Secret123')
        self.assertEqual(result.user.id, self.registered.user.id)

    def test_login_missing_fields(self):
        for email, password in ((None, 'Secret123'), ('ada@example.com', None), ('', '')):
            with self.subTest(email=email, password=password):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.login(email, password)
                self.assertEqual(ctx.exception.message, 'Please provide email and password.')

    def test_unknown_email_and_wrong_password_are_indistinguishable(self):
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.service.login('nobody@example.com', 'Secret123')
        with self.assertRaises(InvalidCredentialsError) as wrong:
            self.service.login('ada@example.com', 'WrongPassword1')

        self.assertIs(type(unknown.exception), type(wrong.exception))
        self.assertEqual(unknown.exception.message, wrong.exception.message)
        self.assertEqual(unknown.exception.status_code, 401)
        self.assertEqual(wrong.exception.status_code, 401)

    def test_login_wraps_persistence_failure(self):
        repo = MagicMock()
        repo.get_by_email.side_effect = PersistenceError('boom')
        service = AuthService(repo, self.hasher, self.issuer)

        with self.assertRaises(ServerError) as ctx:
            service.login('ada@example.com', 'Secret123')
        self.assertEqual(ctx.exception.message, 'Server error during login.')


class TestResolveToken(AuthServiceTestCase):

    def test_resolves_to_public_user(self):
        registered = self.register_default()

        user = self.service.resolve_token(registered.token)

        self.assertEqual(user.id, registered.user.id)
        self.assertEqual(user.credit_score, 300)

    def test_missing_token(self):
        with self.assertRaises(UnauthorizedError):
            self.service.resolve_token(None)

    def test_expired_token(self):
        registered = self.register_default()
        token = TokenIssuer(SECRET, expires_in=timedelta(seconds=-5)).issue(registered.user.id)

        with self.assertRaises(TokenExpiredError):
            self.service.resolve_token(token)

    def test_foreign_token(self):
        registered = self.register_default()
        token = TokenIssuer('other-secret').issue(registered.user.id)

        with self.assertRaises(BadSignatureError):
            self.service.resolve_token(token)

    def test_user_no_longer_exists(self):
        token = self.issuer.issue('deleted-user')

        with self.assertRaises(UnauthorizedError) as ctx:
            self.service.resolve_token(token)
        self.assertEqual(ctx.exception.message, 'Not authorized, user not found.')

    def test_lookup_failure(self):
        repo = MagicMock()
        repo.get_by_id.side_effect = PersistenceError('boom')
        service = AuthService(repo, self.hasher, self.issuer)

        with self.assertRaises(ServerError):
            service.resolve_token(self.issuer.issue('user-1'))


if __name__ == '__main__':
    unittest.main()
