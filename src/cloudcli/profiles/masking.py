"""Secret masking for display and log output."""

LIST_PREFIX_CHARS = 8
LIST_SUFFIX_CHARS = 5
LOG_PREFIX_CHARS = 5
LOG_SUFFIX_CHARS = 5
MASK_CHAR = "*"


def mask_secret(value: str, prefix: int, suffix: int, mask_char: str = MASK_CHAR) -> str:
    """
    Hide the middle of a secret, keeping its first and last characters.

    Values too short to leave anything hidden are masked entirely, so a short
    key is never shown in full.

    Args:
        value: Secret to mask.
        prefix: Number of leading characters left visible.
        suffix: Number of trailing characters left visible.
        mask_char: Character replacing each hidden character.

    Returns:
        Masked string of the same length as value.
    """
    if prefix < 0 or suffix < 0:
        raise ValueError("prefix and suffix must not be negative")

    hidden = len(value) - prefix - suffix
    if hidden <= 0:
        return mask_char * len(value)
    return value[:prefix] + mask_char * hidden + value[len(value) - suffix :]
