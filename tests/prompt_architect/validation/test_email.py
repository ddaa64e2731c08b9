"""Tests for prompt_architect.validation.email."""
import hashlib

import pytest

from prompt_architect.validation.email import (
    validate_email, normalize_email, hash_email, is_disposable,
    REQUIRED, INVALID_FORMAT, DISPOSABLE_EMAIL,
)


class TestValidateEmail:

    def test_valid_email_is_normalized(self):
        result = validate_email('  Jane.Doe@Example.COM ')
        assert result.is_valid is True
        assert result.normalized_email == 'jane.doe@example.com'
        assert result.error is None

    @pytest.mark.parametrize('raw', [None, '', '   ', 42])
    def test_missing_email_is_required(self, raw):
        result = validate_email(raw)
        assert result.is_valid is False
        assert result.error == REQUIRED

    @pytest.mark.parametrize('raw', ['plainaddress', 'a@b', 'a b@example.com', '@example.com', 'a@@example.com'])
    def test_bad_format(self, raw):
        assert validate_email(raw).error == INVALID_FORMAT

    def test_disposable_domain_rejected(self):
        result = validate_email('someone@Mailinator.com')
        assert result.is_valid is False
        assert result.error == DISPOSABLE_EMAIL

    def test_subdomain_of_disposable_domain_is_allowed(self):
        assert validate_email('someone@mx.mailinator.com').is_valid is True


class TestHashing:

    def test_hash_is_sha256_of_normalized_address(self):
        expected = hashlib.sha256(b'jane@example.com').hexdigest()
        assert hash_email(' JANE@example.com ') == expected

    def test_equivalent_addresses_share_a_hash(self):
        assert hash_email('Jane@Example.com') == hash_email('jane@example.com  ')

    def test_normalize(self):
        assert normalize_email('  A@B.CO ') == 'a@b.co'

    def test_is_disposable(self):
        assert is_disposable('x@tempmail.com') is True
        assert is_disposable('x@gmail.com') is False
