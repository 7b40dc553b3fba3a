from kanban.core.modules.passcode.hasher import hash_passcode


class TestHashPasscode:
    def test_deterministic(self):
        assert hash_passcode("123456") == hash_passcode("123456")

    def test_no_collisions_across_all_six_digit_codes(self):
        digests = {hash_passcode(f"{n:06d}") for n in range(1_000_000)}

        assert len(digests) == 1_000_000

    def test_never_returns_plaintext(self):
        digest = hash_passcode("123456")
        assert "123456" not in digest
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)
