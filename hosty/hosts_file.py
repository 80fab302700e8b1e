"""
Hosts 文件文档模型，支持查询、修改和原子性保存
"""

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from hosty.config import HostsConfig
from hosty.errors import (
    AddressNotFoundError,
    AlreadyCommentedError,
    AlreadyUncommentedError,
    HostnameNotFoundError,
    InvalidAddressError,
    InvalidHostnameError,
    NotAnAddressLineError,
    RowOutOfRangeError,
)
from hosty.formatter import render_line, render_lines
from hosty.log import LOGGER_NAME
from hosty.models import HostsFileLine, IPAddress, LineType
from hosty.parser import (
    ip_equal,
    normalize_hostname,
    parse_hosts_file,
    parse_hosts_text,
    parse_ip,
)

DEFAULT_FILE_MODE = 0o644


class HostsFile:
    """
    内存中的 hosts 文件

    按文件顺序保存所有行，提供按行号、IP 和主机名的查询，
    以及添加、删除、注释/取消注释等修改操作。

    线程安全：所有公开方法（包括查询）都持有同一把锁。
    返回的 HostsFileLine 引用在其他行被删除后依然有效，
    行号只代表调用时的位置。
    """

    def __init__(
        self,
        config: Optional[HostsConfig] = None,
        logger: Optional[logging.Logger] = None,
        lines: Optional[Iterable[HostsFileLine]] = None
    ):
        """
        初始化 hosts 文档

        参数:
            config: 配置（默认: 当前平台的 hosts 文件）
            logger: 日志记录器实例
            lines: 初始记录

        异常:
            ValueError: 如果配置无效
        """
        self.config = config or HostsConfig()
        self.config.validate()

        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.lock = threading.Lock()
        self._lines: List[HostsFileLine] = list(lines or [])

    @classmethod
    def load(
        cls,
        config: Optional[HostsConfig] = None,
        logger: Optional[logging.Logger] = None
    ) -> "HostsFile":
        """
        读取并解析配置中的 hosts 文件

        异常:
            OSError: 如果读取文件失败
        """
        config = config or HostsConfig()
        hosts = cls(config, logger, parse_hosts_file(config.file_path))
        hosts.logger.info(f"已加载 hosts 文件 {config.file_path}，共 {len(hosts._lines)} 行")
        return hosts

    @classmethod
    def from_text(
        cls,
        text: str,
        config: Optional[HostsConfig] = None,
        logger: Optional[logging.Logger] = None
    ) -> "HostsFile":
        """从文本构建文档"""
        return cls(config, logger, parse_hosts_text(text))

    def __len__(self) -> int:
        with self.lock:
            return len(self._lines)

    def __iter__(self) -> Iterator[HostsFileLine]:
        return iter(self.lines)

    @property
    def lines(self) -> List[HostsFileLine]:
        """当前所有行的快照"""
        with self.lock:
            return list(self._lines)

    def index_of(self, line: HostsFileLine) -> int:
        """
        返回记录当前所在的行号

        异常:
            ValueError: 如果记录已不在文档中
        """
        with self.lock:
            return self._lines.index(line)

    # ------------------------------------------------------------------
    # 内部辅助方法（调用方必须已持有锁）
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_address(value: Union[str, IPAddress]) -> IPAddress:
        if not isinstance(value, str):
            return value
        ip = parse_ip(value)
        if ip is None:
            raise InvalidAddressError(value)
        return ip

    @staticmethod
    def _parse_hostname(value: str) -> str:
        hostname = normalize_hostname(value)
        if not hostname or "#" in hostname or any(c.isspace() for c in hostname):
            raise InvalidHostnameError(value)
        return hostname

    @staticmethod
    def _refresh(line: HostsFileLine) -> None:
        """修改后重新生成 raw"""
        line.raw = render_line(line)
        line.trimmed = line.raw.strip()

    def _check_row(self, row: int) -> HostsFileLine:
        if row < 0 or row >= len(self._lines):
            raise RowOutOfRangeError(row, len(self._lines))
        return self._lines[row]

    def _find_by_ip(self, ip: IPAddress) -> Optional[Tuple[int, HostsFileLine]]:
        for idx, line in enumerate(self._lines):
            if line.is_address and ip_equal(line.address, ip):
                return idx, line
        return None

    def _find_by_hostname(self, hostname: str) -> Optional[Tuple[int, HostsFileLine]]:
        for idx, line in enumerate(self._lines):
            if line.is_address and line.has_hostname(hostname):
                return idx, line
        return None

    def _require_ip(self, ip: IPAddress) -> Tuple[int, HostsFileLine]:
        found = self._find_by_ip(ip)
        if found is None:
            raise AddressNotFoundError(ip)
        return found

    def _require_hostname(self, hostname: str) -> Tuple[int, HostsFileLine]:
        found = self._find_by_hostname(hostname)
        if found is None:
            raise HostnameNotFoundError(hostname)
        return found

    def _detach_hostname(self, hostname: str, keep_ip: IPAddress) -> None:
        """从所有地址不同的行中移除主机名，主机名为空的行被删除"""
        for line in list(self._lines):
            if not line.is_address or ip_equal(line.address, keep_ip):
                continue
            if not line.has_hostname(hostname):
                continue

            line.hostnames = [hn for hn in line.hostnames if hn != hostname]
            if line.hostnames:
                self._refresh(line)
                self.logger.debug(f"已从 {line.address} 移除主机名 {hostname}")
            else:
                self._lines.remove(line)
                self.logger.debug(f"已删除没有主机名的地址行 {line.address}")

    @staticmethod
    def _new_address_line(ip: IPAddress, hostname: str, comment: str) -> HostsFileLine:
        line = HostsFileLine(
            line_type=LineType.ADDRESS,
            address=ip,
            hostnames=[hostname],
            comment=comment
        )
        HostsFile._refresh(line)
        return line

    def _set_commented(self, row: int, line: HostsFileLine, commented: bool) -> None:
        if not line.is_address:
            raise NotAnAddressLineError(row)
        if line.is_commented == commented:
            if commented:
                raise AlreadyCommentedError(row)
            raise AlreadyUncommentedError(row)

        line.is_commented = commented
        self._refresh(line)
        action = "注释" if commented else "取消注释"
        self.logger.debug(f"已{action}第 {row} 行: {line.address}")

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def get_line_by_row(self, row: int) -> HostsFileLine:
        """
        按行号获取记录

        异常:
            RowOutOfRangeError: 如果行号越界
        """
        with self.lock:
            return self._check_row(row)

    def get_line_by_ip(self, ip: IPAddress) -> Tuple[int, HostsFileLine]:
        """
        按 IP 查找第一条地址行

        IPv4 映射的 IPv6 地址与对应的 IPv4 地址视为相同。

        返回:
            (行号, 记录)

        异常:
            AddressNotFoundError: 如果没有匹配的行
        """
        ip = self._parse_address(ip)
        with self.lock:
            return self._require_ip(ip)

    def get_line_by_address(self, address: str) -> Tuple[int, HostsFileLine]:
        """
        按地址字符串查找第一条地址行

        异常:
            InvalidAddressError: 如果地址无法解析
            AddressNotFoundError: 如果没有匹配的行
        """
        ip = self._parse_address(address)
        return self.get_line_by_ip(ip)

    def get_line_by_hostname(self, hostname: str) -> Tuple[int, HostsFileLine]:
        """
        按主机名查找记录（不区分大小写）

        异常:
            HostnameNotFoundError: 如果没有匹配的行
        """
        hostname = normalize_hostname(hostname)
        with self.lock:
            return self._require_hostname(hostname)

    def lookup_by_hostname(self, hostname: str) -> Tuple[int, IPAddress]:
        """
        查找主机名对应的地址

        返回:
            (行号, 地址)

        异常:
            HostnameNotFoundError: 如果没有匹配的行
        """
        idx, line = self.get_line_by_hostname(hostname)
        return idx, line.address

    # ------------------------------------------------------------------
    # 修改
    # ------------------------------------------------------------------

    def add_host_raw(self, ip: str, hostname: str, comment: str = "") -> HostsFileLine:
        """
        直接追加一条地址行，不处理重复

        异常:
            InvalidAddressError: 如果 IP 无法解析
            InvalidHostnameError: 如果主机名为空或包含空白、'#'
        """
        address = self._parse_address(ip)
        line = self._new_address_line(address, self._parse_hostname(hostname), comment)

        with self.lock:
            self._lines.append(line)

        self.logger.debug(f"已追加: {line}")
        return line

    def add_host(self, ip: str, hostname: str, comment: str = "") -> HostsFileLine:
        """
        添加 IP/主机名 映射，并清理主机名原有的映射

        每个主机名最多对应一个地址：
        - 主机名已指向相同 IP 时，只更新注释（如果提供）
        - 主机名指向其他 IP 时，从旧行移除；旧行没有主机名后被删除
        - 已有该 IP 的行时，主机名追加到该行
        - 否则追加一条新行

        参数:
            ip: IP 地址
            hostname: 主机名（转换为小写）
            comment: 行尾注释，空字符串表示不修改

        返回:
            被修改或新建的记录

        异常:
            InvalidAddressError: 如果 IP 无法解析（此时文档不会被修改）
            InvalidHostnameError: 如果主机名为空或包含空白、'#'（此时文档不会被修改）
        """
        hostname = self._parse_hostname(hostname)
        address = self._parse_address(ip)

        with self.lock:
            found = self._find_by_hostname(hostname)
            if found is not None:
                _, line = found
                if ip_equal(line.address, address):
                    if comment:
                        line.comment = comment
                        self._refresh(line)
                    return line

                self._detach_hostname(hostname, address)

            found = self._find_by_ip(address)
            if found is not None:
                _, line = found
                if not line.has_hostname(hostname):
                    line.hostnames.append(hostname)
                if comment:
                    line.comment = comment
                self._refresh(line)
                self.logger.debug(f"已将 {hostname} 添加到 {line.address}")
                return line

            line = self._new_address_line(address, hostname, comment)
            self._lines.append(line)

        self.logger.debug(f"已添加: {line}")
        return line

    def add_comment(self, comment: str) -> HostsFileLine:
        """
        追加一条注释行

        开头的一个 '#' 会被去掉。注释内容形如 "<IP> <主机名>" 时，
        重新解析后会成为被注释的地址行。
        """
        text = comment.strip()
        if text.startswith("#"):
            text = text[1:].strip()
        line = HostsFileLine(line_type=LineType.COMMENT, comment=text)
        self._refresh(line)

        with self.lock:
            self._lines.append(line)
        return line

    def add_empty(self) -> HostsFileLine:
        """追加一条空行"""
        line = HostsFileLine(line_type=LineType.EMPTY)

        with self.lock:
            self._lines.append(line)
        return line

    def remove_row(self, row: int) -> None:
        """
        删除指定行

        越界的行号会被忽略，不会抛出异常。
        """
        with self.lock:
            if 0 <= row < len(self._lines):
                line = self._lines.pop(row)
                self.logger.debug(f"已删除第 {row} 行: {line}")
            else:
                self.logger.debug(f"忽略越界的行号 {row}")

    def comment_by_row(self, row: int) -> None:
        """
        注释指定行

        异常:
            RowOutOfRangeError: 如果行号越界
            NotAnAddressLineError: 如果该行不是地址行
            AlreadyCommentedError: 如果该行已被注释
        """
        with self.lock:
            self._set_commented(row, self._check_row(row), True)

    def comment_by_ip(self, ip: IPAddress) -> None:
        """
        注释第一条匹配 IP 的地址行

        异常:
            AddressNotFoundError: 如果没有匹配的行
            AlreadyCommentedError: 如果该行已被注释
        """
        ip = self._parse_address(ip)
        with self.lock:
            row, line = self._require_ip(ip)
            self._set_commented(row, line, True)

    def comment_by_address(self, address: str) -> None:
        """同 comment_by_ip，地址以字符串形式给出"""
        self.comment_by_ip(self._parse_address(address))

    def comment_by_hostname(self, hostname: str) -> None:
        """
        注释包含该主机名的地址行

        异常:
            HostnameNotFoundError: 如果没有匹配的行
            AlreadyCommentedError: 如果该行已被注释
        """
        hostname = normalize_hostname(hostname)
        with self.lock:
            row, line = self._require_hostname(hostname)
            self._set_commented(row, line, True)

    def uncomment_by_row(self, row: int) -> None:
        """
        取消注释指定行

        异常:
            RowOutOfRangeError: 如果行号越界
            NotAnAddressLineError: 如果该行不是地址行
            AlreadyUncommentedError: 如果该行未被注释
        """
        with self.lock:
            self._set_commented(row, self._check_row(row), False)

    def uncomment_by_ip(self, ip: IPAddress) -> None:
        ip = self._parse_address(ip)
        with self.lock:
            row, line = self._require_ip(ip)
            self._set_commented(row, line, False)

    def uncomment_by_address(self, address: str) -> None:
        self.uncomment_by_ip(self._parse_address(address))

    def uncomment_by_hostname(self, hostname: str) -> None:
        hostname = normalize_hostname(hostname)
        with self.lock:
            row, line = self._require_hostname(hostname)
            self._set_commented(row, line, False)

    # ------------------------------------------------------------------
    # 渲染和保存
    # ------------------------------------------------------------------

    def render_hosts_file(self) -> str:
        """渲染整个文件，N 行之间有 N-1 个换行"""
        with self.lock:
            return render_lines(self._lines)

    def render_hosts_file_line(self, row: int) -> str:
        """
        渲染指定行

        异常:
            RowOutOfRangeError: 如果行号越界
        """
        with self.lock:
            return render_line(self._check_row(row))

    def save_hosts_file(self) -> None:
        """保存到配置中的路径"""
        self.save_hosts_file_as(self.config.file_path)

    def save_hosts_file_as(self, path: Union[str, Path]) -> None:
        """
        原子性写入 hosts 文件

        先写入同一目录下的临时文件，再用 os.replace 替换目标文件。
        已存在文件的权限位保持不变。

        参数:
            path: 目标路径

        异常:
            PermissionError: 如果没有写入权限
            OSError: 如果文件系统操作失败
        """
        path = Path(path)
        content = self.render_hosts_file()

        try:
            try:
                mode = os.stat(path).st_mode & 0o777
            except FileNotFoundError:
                mode = DEFAULT_FILE_MODE

            # 写入临时文件（同一目录）
            temp_fd, temp_path = tempfile.mkstemp(
                dir=path.parent,
                prefix='.hosts.tmp.',
                text=True
            )

            try:
                with os.fdopen(temp_fd, 'w', encoding='utf-8', newline='') as f:
                    f.write(content)
                os.chmod(temp_path, mode)

                # 原子性替换（同一文件系统内有效）
                os.replace(temp_path, path)

            except Exception:
                # 出错时清理临时文件
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise

        except PermissionError:
            self.logger.error(f"写入 hosts 文件权限被拒绝: {path}")
            raise
        except OSError as e:
            self.logger.error(f"保存 hosts 文件失败: {e}")
            raise

        self.logger.info(f"已保存 hosts 文件 {path}，共 {len(self)} 行")
