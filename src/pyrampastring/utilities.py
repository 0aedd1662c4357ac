# -*- encoding: utf-8 -*-
# @File   : utilities.py
# @Time   : 2024/10/12 22:58:02
# @Author : Kariko Lin

import hashlib

from .safepath import get_file

_CHUNK_SIZE = 1 << 16


def calculate_sha1_for_file(path: str | None) -> str:
    """SHA1 hex digest of a file, or `''` if there's no such file."""
    if path is None or not path.strip():
        return ''
    file = get_file(path)
    if not file.is_file():
        return ''
    sha1 = hashlib.sha1(usedforsecurity=False)
    with file.open('rb') as fp:
        while chunk := fp.read(_CHUNK_SIZE):
            sha1.update(chunk)
    return sha1.hexdigest()


def calculate_sha1_for_string(s: str) -> str:
    """SHA1 hex digest of `s` in ASCII, non-ASCII chars counted as `?`."""
    return hashlib.sha1(
        s.encode('ascii', errors='replace'), usedforsecurity=False
    ).hexdigest()
