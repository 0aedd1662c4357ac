# -*- encoding: utf-8 -*-
# @File   : safepath.py
# @Time   : 2024/10/12 22:40:17
# @Author : Kariko Lin

"""Path joining that doesn't care who wrote the separators.

INIs written on Windows are full of `\\`, while the ones from
some Linux ports use `/`, sometimes doubled. Everything goes `os.sep` here.
"""

from os import remove, sep
from os.path import abspath, dirname, isfile
from pathlib import Path


def _clean(path: str) -> str:
    return sep.join(i for i in path.replace('\\', '/').split('/') if i)


def combine(*paths: str | None) -> str:
    """Join the parts with `os.sep`, no leading or trailing separators.

    `None` parts are skipped. On POSIX an absolute first part
    (`/home/...`) keeps its root.
    """
    parts = [i for i in paths if i is not None]
    ret = sep.join(j for j in (_clean(i) for i in parts) if j)
    if parts and sep == '/' and parts[0].startswith('/'):
        ret = sep + ret
    return ret


def get_directory(*paths: str | None) -> Path:
    return Path(combine(*paths))


def get_file(*paths: str | None) -> Path:
    return Path(combine(*paths))


def delete_file_if_exists(*paths: str | None) -> bool:
    """Returns `True` only if there was a file and it got deleted."""
    path = combine(*paths)
    if not path or not isfile(path):
        return False
    remove(path)
    return True


def get_file_directory_name(*paths: str | None) -> str:
    """Absolute path of the folder containing the file."""
    return dirname(abspath(combine(*paths)))
