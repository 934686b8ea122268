"""Checksum utilities for file integrity verification."""

import zlib
from pathlib import Path
from typing import BinaryIO

# Constants for checksum calculation
CRC32_CHUNK_SIZE = 8192  # 8 KB chunks


def crc32_stream(stream: BinaryIO, chunk_size: int = CRC32_CHUNK_SIZE) -> int:
    """
    Compute CRC32 checksum of a binary stream, reading it to the end.
    
    Memory use is bounded by ``chunk_size`` regardless of the stream length.
    A read interrupted by a signal is retried; any other read error propagates.
    
    Args:
        stream: Readable binary file object
        chunk_size: Number of bytes to read per call
        
    Returns:
        CRC32 checksum as unsigned 32-bit integer
        
    Raises:
        OSError: If the stream cannot be read
    """
    crc = 0
    
    while True:
        try:
            chunk = stream.read(chunk_size)
        except InterruptedError:
            continue
        if not chunk:
            break
        crc = zlib.crc32(chunk, crc)
    
    # Return as unsigned 32-bit integer
    return crc & 0xFFFFFFFF


def compute_crc32(file_path: Path) -> int:
    """
    Compute CRC32 checksum of entire file.
    
    Args:
        file_path: Path to the file
        
    Returns:
        CRC32 checksum as unsigned 32-bit integer
        
    Raises:
        OSError: If file cannot be read
    """
    with open(file_path, 'rb') as f:
        return crc32_stream(f)
