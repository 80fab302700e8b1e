"""
hosts 文件解析模块

将原始文本逐行解析为 HostsFileLine 记录。单行解析从不抛出异常，
无法识别的行保留为 UNKNOWN 并原样输出。
"""

import ipaddress
from pathlib import Path
from typing import List, Optional, Union

from hosty.models import HostsFileLine, IPAddress, LineType

COMMENT_CHAR = "#"


def parse_ip(value: str) -> Optional[IPAddress]:
    """
    解析 IPv4 或 IPv6 地址

    返回:
        地址对象，无法解析时返回 None
    """
    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        return None


def normalize_ip(ip: IPAddress) -> IPAddress:
    """将 IPv4 映射的 IPv6 地址 (::ffff:a.b.c.d) 转换为 IPv4 地址"""
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def ip_equal(a: Optional[IPAddress], b: Optional[IPAddress]) -> bool:
    if a is None or b is None:
        return False
    return normalize_ip(a) == normalize_ip(b)


def normalize_hostname(hostname: str) -> str:
    return hostname.strip().lower()


def parse_line(raw: str, line_number: int = 0) -> HostsFileLine:
    """
    解析单行文本

    参数:
        raw: 去掉换行符的行文本
        line_number: 原始行号

    返回:
        类型为 EMPTY、COMMENT、ADDRESS 或 UNKNOWN 的记录
    """
    trimmed = raw.strip()
    line = HostsFileLine(line_number=line_number, raw=raw, trimmed=trimmed)

    if not trimmed:
        line.line_type = LineType.EMPTY
        return line

    is_commented = trimmed.startswith(COMMENT_CHAR)
    body = trimmed[1:].strip() if is_commented else trimmed

    # 地址和主机名在第一个 '#' 之前，其后是行尾注释
    data, _, comment = body.partition(COMMENT_CHAR)
    tokens = data.split()

    if len(tokens) >= 2:
        address = parse_ip(tokens[0])
        if address is not None:
            line.line_type = LineType.ADDRESS
            line.address = address
            line.hostnames = [normalize_hostname(t) for t in tokens[1:]]
            line.comment = comment.strip()
            line.is_commented = is_commented
            return line

    if is_commented:
        line.line_type = LineType.COMMENT
        line.comment = body
        return line

    line.line_type = LineType.UNKNOWN
    return line


def parse_hosts_text(text: str) -> List[HostsFileLine]:
    """
    解析完整的 hosts 文本

    以 '\\n' 分割，去掉每行末尾的 '\\r'。以换行结尾的文本会得到一个
    末尾的 EMPTY 记录，从而保证渲染后与原文一致。
    """
    lines = []
    for number, raw in enumerate(text.split("\n"), start=1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        lines.append(parse_line(raw, number))
    return lines


def parse_hosts_file(path: Union[str, Path]) -> List[HostsFileLine]:
    """
    读取并解析 hosts 文件

    异常:
        OSError: 文件读取失败时原样抛出
    """
    with open(path, "r", encoding="utf-8") as f:
        return parse_hosts_text(f.read())
