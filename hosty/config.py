"""
配置管理模块，支持环境变量
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Optional

WINDOWS_HOSTS_PATH = "C:\\Windows\\System32\\drivers\\etc\\hosts"
UNIX_HOSTS_PATH = "/etc/hosts"


def default_hosts_path(platform: Optional[str] = None) -> str:
    """
    根据操作系统返回默认的 hosts 文件路径

    参数:
        platform: sys.platform 形式的平台名（默认: 当前平台）

    异常:
        ValueError: 如果无法识别操作系统
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WINDOWS_HOSTS_PATH
    if platform.startswith("linux") or platform == "darwin":
        return UNIX_HOSTS_PATH
    raise ValueError(f"无法识别的操作系统: {platform}")


@dataclass
class HostsConfig:
    """应用配置类，从环境变量加载配置"""

    file_path: str = field(default_factory=default_hosts_path)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "HostsConfig":
        """
        从环境变量加载配置

        环境变量说明:
            HOSTS_FILE: hosts 文件路径 (默认: 当前平台的 hosts 文件)
            LOG_LEVEL: 日志级别 (默认: INFO)
        """
        hosts_file = os.getenv("HOSTS_FILE")
        return cls(
            file_path=hosts_file or default_hosts_path(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper()
        )

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )
