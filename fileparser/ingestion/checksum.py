"""
Checksum utilities for change detection.
Binary formats hash the original file bytes; plain text hashes the UTF-8
encoding of the extracted text.
"""

import hashlib
from pathlib import Path
from fileparser.core.logging import setup_logger

logger = setup_logger()

CHUNK_SIZE = 8192


def _new_hasher(algorithm: str):
    if algorithm not in ("sha256", "sha1", "md5"):
        raise ValueError(f"Unsupported algorithm: {algorithm}")
    return hashlib.new(algorithm)


def compute_file_checksum(file_path: str, algorithm: str = "sha256") -> str:
    """
    Compute a checksum over the raw bytes of a file.
    
    Args:
        file_path: Path to file
        algorithm: Hash algorithm (sha256, sha1, md5)
    
    Returns:
        str: Hexadecimal checksum hash
    
    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If algorithm is unsupported
    """
    path = Path(file_path)
    hasher = _new_hasher(algorithm)
    
    # Read file in chunks to handle large files
    with open(path, "rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    
    checksum = hasher.hexdigest()
    logger.debug(f"Computed {algorithm} checksum: {checksum[:16]}... for {path.name}")
    
    return checksum


def compute_text_checksum(text: str, algorithm: str = "sha256") -> str:
    """
    Compute a checksum over the UTF-8 encoding of text.
    
    Args:
        text: Extracted text
        algorithm: Hash algorithm (sha256, sha1, md5)
    
    Returns:
        str: Hexadecimal checksum hash
    """
    hasher = _new_hasher(algorithm)
    hasher.update((text or "").encode("utf-8"))
    return hasher.hexdigest()
