from __future__ import annotations

import hashlib
import unittest

from hashrng import HashRng, builder, with_digest, with_seed


class BuilderTests(unittest.TestCase):
    def test_seed_then_digest(self):
        rng = with_seed("foobar").with_digest("sha256")
        self.assertIsInstance(rng, HashRng)
        self.assertEqual(rng.random_bytes(80), HashRng.from_seed("foobar", "sha256").random_bytes(80))

    def test_digest_then_seed(self):
        rng = with_digest(hashlib.sha256).with_seed({"nonce": 7})
        self.assertEqual(rng.random_bytes(80), HashRng.from_seed({"nonce": 7}, "sha256").random_bytes(80))

    def test_digest_builder_is_reusable(self):
        b = builder.with_digest("sha3_256")
        first = b.with_seed("a")
        second = b.with_seed("a")
        self.assertIsNot(first, second)
        self.assertEqual(first.random_bytes(40), second.random_bytes(40))
        self.assertNotEqual(b.with_seed("b").random_bytes(40), b.with_seed("a").random_bytes(40))

    def test_encoder_is_forwarded(self):
        raw = lambda s: s.encode("ascii")
        a = with_seed("plain", encoder=raw).with_digest("sha256")
        b = with_digest("sha256").with_seed("plain", encoder=raw)
        self.assertEqual(a.seed_bytes, b"plain")
        self.assertEqual(a.random_bytes(33), b.random_bytes(33))

    def test_digest_resolved_eagerly(self):
        with self.assertRaises(ValueError):
            with_digest("not-a-digest")


if __name__ == "__main__":
    unittest.main()
