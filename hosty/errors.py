"""
hosts 文件操作的异常定义
"""

from typing import Optional


class HostsFileError(Exception):
    """所有 hosty 异常的基类"""


class InvalidAddressError(HostsFileError, ValueError):
    """无法解析的 IP 地址"""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"无法解析 IP 地址: {address!r}")


class HostnameNotFoundError(HostsFileError, LookupError):
    """没有任何行包含该主机名"""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__(f"未找到主机名: {hostname}")


class AddressNotFoundError(HostsFileError, LookupError):
    """没有任何行使用该地址"""

    def __init__(self, address: object):
        self.address = address
        super().__init__(f"未找到地址: {address}")


class NotAnAddressLineError(HostsFileError):
    """目标行不是 ADDRESS 行"""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"第 {row} 行不是地址行")


class AlreadyCommentedError(HostsFileError):
    """目标行已经被注释"""

    def __init__(self, row: Optional[int] = None):
        self.row = row
        super().__init__(f"第 {row} 行已经被注释")


class AlreadyUncommentedError(HostsFileError):
    """目标行未被注释"""

    def __init__(self, row: Optional[int] = None):
        self.row = row
        super().__init__(f"第 {row} 行没有被注释")


class RowOutOfRangeError(HostsFileError, IndexError):
    """行号超出文档范围"""

    def __init__(self, row: int, size: int):
        self.row = row
        self.size = size
        super().__init__(f"行号 {row} 超出范围 (共 {size} 行)")


class InvalidHostnameError(HostsFileError, ValueError):
    """主机名为空或包含空白、'#'，写入后无法被重新解析"""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__(f"无效的主机名: {hostname!r}")
