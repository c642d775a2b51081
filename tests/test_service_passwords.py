"""Tests for :mod:`loginserver.services.passwords`."""

from unittest import TestCase, mock
from typing import Any

from loginserver.exceptions import HashingFailure
from loginserver.services import passwords


class TestPasswordHasher(TestCase):
    """:class:`.PasswordHasher` hashes and checks passwords with bcrypt."""

    def setUp(self) -> None:
        """Use a low work factor to keep the tests fast."""
        self.hasher = passwords.PasswordHasher(rounds=4, concurrency=2)

    def test_verify_own_hash(self) -> None:
        """A password matches its own hash."""
        hashed = self.hasher.hash('p1')
        self.assertNotEqual(hashed, 'p1')
        self.assertTrue(hashed.startswith('$2'))
        self.assertTrue(self.hasher.verify('p1', hashed))

    def test_verify_other_hash(self) -> None:
        """A password does not match the hash of a different password."""
        self.assertFalse(self.hasher.verify('p1', self.hasher.hash('p2')))

    def test_hashes_are_salted(self) -> None:
        """Hashing the same password twice gives different hashes."""
        self.assertNotEqual(self.hasher.hash('p1'), self.hasher.hash('p1'))

    def test_work_factor(self) -> None:
        """The configured number of rounds is encoded in the hash."""
        self.assertEqual(self.hasher.rounds, 4)
        self.assertIn('$04$', self.hasher.hash('p1'))

    def test_verify_overlong_password(self) -> None:
        """A password that bcrypt would truncate never matches."""
        hashed = self.hasher.hash('a' * 72)
        self.assertTrue(self.hasher.verify('a' * 72, hashed))
        self.assertFalse(self.hasher.verify('a' * 73, hashed))

    def test_verify_malformed_hash(self) -> None:
        """A stored value that is not a bcrypt hash is a failure, not a miss."""
        with self.assertRaises(HashingFailure):
            self.hasher.verify('p1', 'not-a-bcrypt-hash')

    @mock.patch(f'{passwords.__name__}.bcrypt.hashpw')
    def test_hash_when_bcrypt_fails(self, mock_hashpw: Any) -> None:
        """When bcrypt cannot hash, raises :class:`.HashingFailure`."""
        mock_hashpw.side_effect = MemoryError
        with self.assertRaises(HashingFailure):
            self.hasher.hash('p1')

    def test_spend(self) -> None:
        """Checking against the decoy hash never succeeds or raises."""
        self.assertIsNone(self.hasher.spend('p1'))
        self.assertIsNone(self.hasher.spend(''))


class TestIsAcceptable(TestCase):
    """:func:`.is_acceptable` checks the length limits of bcrypt."""

    def test_limits(self) -> None:
        """Passwords must be between 1 and 72 bytes long."""
        self.assertFalse(passwords.is_acceptable(''))
        self.assertTrue(passwords.is_acceptable('p'))
        self.assertTrue(passwords.is_acceptable('a' * 72))
        self.assertFalse(passwords.is_acceptable('a' * 73))

    def test_multibyte(self) -> None:
        """The limit is counted in UTF-8 bytes, not characters."""
        self.assertTrue(passwords.is_acceptable('é' * 36))
        self.assertFalse(passwords.is_acceptable('é' * 37))
