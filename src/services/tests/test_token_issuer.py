"""Unit tests for TokenIssuer: issue/verify, expiry, tampering."""

import base64
import json
import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from domain.model.errors import (
    BadSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    UnauthorizedError,
)
from services.token_issuer import JWT_ALGORITHM, TokenIssuer

SECRET = 'test-secret-key'


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + '=' * (-len(segment) % 4))


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b'=').decode()


def _replace_subject(token: str, subject: str) -> str:
    """Swap the payload's subject but keep the original signature."""
    header, payload, signature = token.split('.')
    claims = json.loads(_b64decode(payload))
    claims['sub'] = subject
    return '.'.join([header, _b64encode(json.dumps(claims).encode()), signature])


class TestTokenIssuer(unittest.TestCase):

    def setUp(self):
        self.issuer = TokenIssuer(SECRET)

    def test_issue_then_verify_returns_subject(self):
        token = self.issuer.issue('user-123')
        self.assertEqual(self.issuer.verify(token), 'user-123')

    def test_token_carries_issued_at_and_expiry(self):
        before = int(datetime.now(timezone.utc).timestamp())
        token = self.issuer.issue('user-123')

        claims = jwt.get_unverified_claims(token)
        self.assertEqual(claims['sub'], 'user-123')
        self.assertGreaterEqual(claims['iat'], before)
        self.assertEqual(claims['exp'] - claims['iat'], 24 * 60 * 60)

    def test_default_validity_is_one_day(self):
        self.assertEqual(self.issuer.expires_in, timedelta(days=1))

    def test_custom_validity(self):
        issuer = TokenIssuer(SECRET, expires_in=timedelta(minutes=30))
        claims = jwt.get_unverified_claims(issuer.issue('u'))
        self.assertEqual(claims['exp'] - claims['iat'], 30 * 60)

    def test_expired_token(self):
        expired_issuer = TokenIssuer(SECRET, expires_in=timedelta(seconds=-10))
        token = expired_issuer.issue('user-123')

        with self.assertRaises(TokenExpiredError):
            self.issuer.verify(token)

    def test_tampered_payload_fails_signature(self):
        token = _replace_subject(self.issuer.issue('user-123'), 'someone-else')

        with self.assertRaises(BadSignatureError):
            self.issuer.verify(token)

    def test_token_signed_with_other_secret(self):
        token = TokenIssuer('another-secret').issue('user-123')

        with self.assertRaises(BadSignatureError):
            self.issuer.verify(token)

    def test_garbage_token_is_malformed(self):
        for token in ('not-a-token', 'a.b', 'a.b.c', ''):
            with self.subTest(token=token):
                with self.assertRaises(MalformedTokenError):
                    self.issuer.verify(token)

    def test_token_without_subject_is_malformed(self):
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jwt.encode({'exp': exp}, SECRET, algorithm=JWT_ALGORITHM)

        with self.assertRaises(MalformedTokenError):
            self.issuer.verify(token)

    def test_all_failures_are_unauthorized(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            self.issuer.verify('garbage')
        self.assertEqual(ctx.exception.status_code, 401)

    def test_empty_secret_rejected(self):
        with self.assertRaises(ValueError):
            TokenIssuer('')


if __name__ == '__main__':
    unittest.main()
