# Copyright 2018-present Network Optix, Inc. Licensed under MPL 2.0: www.mozilla.org/MPL/2.0/
import logging
import os
import threading
import unittest

from timed_otp import CryptoUnavailable
from timed_otp import DEFAULT_SECRET_SIZE
from timed_otp import MalformedEncoding
from timed_otp import compute_token
from timed_otp import decode_to_bytes
from timed_otp import format_token
from timed_otp import generate_secret
from timed_otp import validate

_SECRET = 'NOU4XWWCB4ZJOPNZRF6WRTFRMQ======'
_TOKEN = 935619
_STEP = 53082852
# Base-32 of b'12345678901234567890', the RFC 6238 SHA-1 seed.
_RFC6238_SECRET = 'GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ'


def _ms_within_step(step):
    return step * 30000 + 12345


class TestComputeToken(unittest.TestCase):

    def test_known_vector(self):
        self.assertEqual(compute_token(_STEP, _SECRET), _TOKEN)

    def test_deterministic(self):
        self.assertEqual(compute_token(_STEP, _SECRET), compute_token(_STEP, _SECRET))

    def test_rfc6238_vectors(self):
        # Last six digits of the 8-digit values from RFC 6238, appendix B.
        vectors = [
            (59, 287082),
            (1111111109, 81804),
            (1111111111, 50471),
            (1234567890, 5924),
            (2000000000, 279037),
            (20000000000, 353130),
            ]
        for timestamp_sec, token in vectors:
            with self.subTest(timestamp_sec=timestamp_sec):
                self.assertEqual(compute_token(timestamp_sec // 30, _RFC6238_SECRET), token)

    def test_unpadded_secret(self):
        self.assertEqual(compute_token(_STEP, _SECRET.rstrip('=')), _TOKEN)

    def test_malformed_secret(self):
        with self.assertRaises(MalformedEncoding):
            compute_token(_STEP, 'nou4xwwcb4zjopnzrf6wrtfrmq======')

    def test_empty_secret(self):
        with self.assertRaises(CryptoUnavailable):
            compute_token(_STEP, '')


class TestValidate(unittest.TestCase):

    def test_present(self):
        self.assertTrue(validate(_TOKEN, _SECRET, _ms_within_step(_STEP)))

    def test_one_step_of_skew(self):
        self.assertTrue(validate(_TOKEN, _SECRET, _ms_within_step(_STEP - 1)))
        self.assertTrue(validate(_TOKEN, _SECRET, _ms_within_step(_STEP + 1)))

    def test_two_steps_of_skew(self):
        self.assertFalse(validate(_TOKEN, _SECRET, _ms_within_step(_STEP - 2)))
        self.assertFalse(validate(_TOKEN, _SECRET, _ms_within_step(_STEP + 2)))

    def test_neighbour_tokens_at_present(self):
        now_ms = _ms_within_step(_STEP)
        self.assertTrue(validate(compute_token(_STEP - 1, _SECRET), _SECRET, now_ms))
        self.assertTrue(validate(compute_token(_STEP + 1, _SECRET), _SECRET, now_ms))

    def test_wrong_token(self):
        wrong = (_TOKEN + 1) % 1000000
        candidates = {compute_token(_STEP + shift, _SECRET) for shift in (-1, 0, 1)}
        self.assertNotIn(wrong, candidates)
        self.assertFalse(validate(wrong, _SECRET, _ms_within_step(_STEP)))

    def test_check_order(self):
        with self.assertLogs('timed_otp._tokens', level=logging.DEBUG) as logs:
            validate(_TOKEN, _SECRET, _ms_within_step(_STEP))
            validate(_TOKEN, _SECRET, _ms_within_step(_STEP + 1))
            validate(_TOKEN, _SECRET, _ms_within_step(_STEP - 1))
        [present, past, future] = logs.output
        self.assertIn(f"PRESENT step {_STEP}", present)
        self.assertIn(f"PAST step {_STEP}", past)
        self.assertIn(f"FUTURE step {_STEP}", future)

    def test_secret_is_not_logged(self):
        with self.assertLogs('timed_otp', level=logging.DEBUG) as logs:
            validate(_TOKEN, _SECRET, _ms_within_step(_STEP))
        self.assertNotIn(_SECRET, '\n'.join(logs.output))

    def test_start_of_epoch(self):
        for now_ms in [0, 1, 29999]:
            with self.subTest(now_ms=now_ms):
                self.assertIsInstance(validate(0, _SECRET, now_ms), bool)
        past_token = compute_token(-1, _SECRET)
        self.assertTrue(validate(past_token, _SECRET, 0))

    def test_wall_clock(self):
        secret = generate_secret()
        self.assertIsInstance(validate(0, secret), bool)

    def test_malformed_secret(self):
        with self.assertRaises(MalformedEncoding):
            validate(_TOKEN, 'NOU4XWWCB4ZJOPNZRF6WRTFRM1======', _ms_within_step(_STEP))


class TestGenerateSecret(unittest.TestCase):

    def test_default_size(self):
        secret = generate_secret()
        self.assertEqual(len(decode_to_bytes(secret)), 16)
        self.assertEqual(DEFAULT_SECRET_SIZE, 16)
        self.assertEqual(len(secret), 32)
        self.assertTrue(secret.endswith('======'))

    def test_custom_size(self):
        for size in [1, 5, 10, 20, 32]:
            with self.subTest(size=size):
                self.assertEqual(len(decode_to_bytes(generate_secret(size))), size)

    def test_deterministic_source(self):
        requested = []

        def random_bytes(n):
            requested.append(n)
            return bytes(16) + b'\xff' * (n - 16)

        secret = generate_secret(random_bytes=random_bytes)
        self.assertEqual(requested, [128])
        self.assertEqual(decode_to_bytes(secret), bytes(16))

    def test_short_source(self):
        with self.assertRaises(ValueError):
            generate_secret(random_bytes=lambda n: bytes(n - 1))

    def test_bad_size(self):
        with self.assertRaises(ValueError):
            generate_secret(0)

    def test_secrets_differ(self):
        self.assertNotEqual(generate_secret(), generate_secret())

    def test_concurrent_callers(self):
        secrets = []
        lock = threading.Lock()

        def generate():
            secret = generate_secret(random_bytes=os.urandom)
            with lock:
                secrets.append(secret)

        threads = [threading.Thread(target=generate) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(set(secrets)), 16)


class TestFormatToken(unittest.TestCase):

    def test_zero_padding(self):
        self.assertEqual(format_token(7123), '007123')
        self.assertEqual(format_token(0), '000000')
        self.assertEqual(format_token(935619), '935619')


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)7s %(name)s %(message).5000s",
        )
    unittest.main()
