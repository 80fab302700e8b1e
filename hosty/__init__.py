"""
hosty - 解析、查询和编辑 hosts 文件
"""

__version__ = "1.4.0"
__author__ = "hosty Project"

from hosty.config import HostsConfig
from hosty.errors import (
    AddressNotFoundError,
    AlreadyCommentedError,
    AlreadyUncommentedError,
    HostnameNotFoundError,
    HostsFileError,
    InvalidAddressError,
    InvalidHostnameError,
    NotAnAddressLineError,
    RowOutOfRangeError,
)
from hosty.hosts_file import HostsFile
from hosty.models import HostsFileLine, LineType

__all__ = [
    "HostsFile",
    "HostsConfig",
    "HostsFileLine",
    "LineType",
    "HostsFileError",
    "InvalidAddressError",
    "InvalidHostnameError",
    "HostnameNotFoundError",
    "AddressNotFoundError",
    "NotAnAddressLineError",
    "AlreadyCommentedError",
    "AlreadyUncommentedError",
    "RowOutOfRangeError",
]
