"""
Hosts 文件数据模型
"""

import ipaddress
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class LineType(IntEnum):
    """hosts 文件行的类型"""

    UNKNOWN = 0
    EMPTY = 10
    COMMENT = 20
    ADDRESS = 30


@dataclass(eq=False)
class HostsFileLine:
    """
    代表 hosts 文件中的单行

    属性:
        line_number: 原始行号（从 1 开始，新增的行为 0）
        line_type: 行类型
        address: IP 地址（仅 ADDRESS 行）
        hostnames: 小写主机名列表（仅 ADDRESS 行）
        raw: 行的原始文本
        trimmed: 去掉首尾空白的 raw
        comment: 注释内容（ADDRESS 行的行尾注释，或 COMMENT 行的正文）
        is_commented: ADDRESS 行是否被 '#' 注释掉
    """

    line_number: int = 0
    line_type: LineType = LineType.UNKNOWN
    address: Optional[IPAddress] = None
    hostnames: List[str] = field(default_factory=list)
    raw: str = ""
    trimmed: str = ""
    comment: str = ""
    is_commented: bool = False

    @property
    def is_address(self) -> bool:
        return self.line_type == LineType.ADDRESS

    def has_hostname(self, hostname: str) -> bool:
        return hostname in self.hostnames

    def __str__(self) -> str:
        if self.is_address:
            state = " (已注释)" if self.is_commented else ""
            return f"{self.address} -> {', '.join(self.hostnames)}{state}"
        return f"{self.line_type.name}: {self.trimmed}"
