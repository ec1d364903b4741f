"""Short key generation."""

import re
import secrets


class KeyGenerator:
    """Generate random hexadecimal keys for URL mappings."""

    KEY_BYTES = 4
    KEY_PATTERN = re.compile(r"[0-9a-f]{8}")

    def generate(self) -> str:
        """Generate a new key.

        Returns:
            8 lowercase hex characters drawn from 4 random bytes
        """
        return secrets.token_hex(self.KEY_BYTES)

    @classmethod
    def is_valid_key(cls, key: str) -> bool:
        """Check if a string has the shape of a generated key.

        Args:
            key: Candidate key

        Returns:
            True if key is exactly 8 lowercase hex characters
        """
        return isinstance(key, str) and cls.KEY_PATTERN.fullmatch(key) is not None
