"""
Short code generation.

Codes are random, not unique by construction. Uniqueness is enforced by the
unique constraint on links.short_code; the allocator retries on collision.
"""

import random
from typing import Optional

# 0-9 (10) + a-z (26) + A-Z (26) = 62 characters, URL-safe
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def generate_code(length: int, rng: Optional[random.Random] = None) -> str:
    """
    Draw `length` symbols uniformly, with replacement, from the alphabet.

    Args:
        length: Number of characters in the code
        rng: Random source (module-level generator if not given)

    Returns:
        A candidate short code
    """
    if length < 1:
        raise ValueError(f"Code length must be positive, got {length}")
    source = rng or random
    return "".join(source.choices(ALPHABET, k=length))


def is_valid_code(code: str, length: int) -> bool:
    """Check that a string has the shape of a generated code"""
    return len(code) == length and all(c in ALPHABET for c in code)


class ShortCodeGenerator:
    """
    Random fixed-length code generator.

    Pros: Simple, unpredictable, no coordination between writers
    Cons: Collisions are possible (62^7 ≈ 3.5 trillion codes at length 7),
          so every candidate must go through the store's unique constraint
    """

    def __init__(self, length: int = 7, rng: Optional[random.Random] = None):
        self.length = length
        self.rng = rng

    def generate(self) -> str:
        """Generate one candidate code"""
        return generate_code(self.length, self.rng)
