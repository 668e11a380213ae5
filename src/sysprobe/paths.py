"""Filesystem root resolution for disk usage."""

import os
import platform
from typing import Mapping, Optional

DEFAULT_SYSTEM_DRIVE = "C:"
SYSTEM_DRIVE_ENV = "SystemDrive"


def resolve_root_path(system: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the filesystem root whose usage is reported.

    On Windows this is the system drive (``%SystemDrive%``, ``C:`` when unset)
    with a trailing backslash; everywhere else it is ``/``.
    """
    if system is None:
        system = platform.system()

    if system != "Windows":
        return "/"

    if environ is None:
        environ = os.environ

    drive = environ.get(SYSTEM_DRIVE_ENV) or DEFAULT_SYSTEM_DRIVE
    if not drive.endswith("\\"):
        drive += "\\"
    return drive
