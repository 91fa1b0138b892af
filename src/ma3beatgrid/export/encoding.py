#!/usr/bin/env python3
"""
Base64 packaging of the plugin script
The console expects CRLF line endings and the script split into base64 blocks
"""

import base64
import re
from typing import Dict, List

from ma3beatgrid.core.logger import log_debug


DEFAULT_CHUNK_SIZE = 1024


def normalize_line_endings(text: str) -> str:
    """Turn every LF (with or without a preceding CR) into CRLF"""
    return re.sub(r"\r?\n", "\r\n", text)


def count_line_endings(text: str) -> Dict[str, int]:
    crlf = text.count("\r\n")
    counts = {
        "crlf": crlf,
        "lf": text.count("\n") - crlf,
        "cr": text.count("\r") - crlf,
    }
    log_debug(
        f"LINE ENDINGS: CRLF: {counts['crlf']} LF-only: {counts['lf']} CR-only: {counts['cr']}",
        component="export",
    )
    return counts


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def encode_base64(text: str) -> str:
    """CRLF-normalize, UTF-8 encode and base64 the text"""
    return _b64(normalize_line_endings(text))


def split_into_base64_blocks(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """Cut the normalized text into ``chunk_size`` characters and base64 each piece.

    Chunks are cut on characters, not bytes, so each block decodes to valid
    UTF-8 on its own. Blocks are not normalized again, so a CRLF pair cut
    in half by a chunk boundary still decodes to a single CRLF.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    text = normalize_line_endings(text)
    return [
        _b64(text[i : i + chunk_size]) for i in range(0, len(text), chunk_size)
    ]


def decode_base64_blocks(blocks: List[str]) -> str:
    """Inverse of split_into_base64_blocks"""
    return "".join(base64.b64decode(block).decode("utf-8") for block in blocks)
