"""Hash utilities for Sprout."""

import hashlib


def fingerprint(data: bytes) -> str:
    """
    Compute the content fingerprint of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex SHA-1 digest
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath) -> str:
    """
    Compute the fingerprint of a file's content.
    
    Args:
        filepath: Path to file
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return fingerprint(f.read())


def is_fingerprint(value: str) -> bool:
    """Check whether value looks like a full fingerprint."""
    return len(value) == 40 and all(c in '0123456789abcdef' for c in value)
