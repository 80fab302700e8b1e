"""
hosts 文件渲染模块
"""

from typing import Iterable

from hosty.models import HostsFileLine, LineType


def render_line(line: HostsFileLine) -> str:
    """
    将记录渲染为规范文本

    格式:
        EMPTY:   空字符串
        COMMENT: 原始文本；新建的行为 # <注释>
        ADDRESS: [# ]<IP>\\t<主机名 主机名...>[\\t# <注释>]
        UNKNOWN: 原始文本
    """
    if line.line_type == LineType.EMPTY:
        return ""

    if line.line_type == LineType.COMMENT:
        # 解析得到的注释行原样输出
        if line.raw:
            return line.raw
        return f"# {line.comment}" if line.comment else "#"

    if line.line_type == LineType.ADDRESS:
        prefix = "# " if line.is_commented else ""
        text = f"{prefix}{line.address}\t{' '.join(line.hostnames)}"
        if line.comment:
            text += f"\t# {line.comment}"
        return text

    return line.raw


def render_lines(lines: Iterable[HostsFileLine]) -> str:
    # join 保证最后不会多出一个空行
    return "\n".join(render_line(line) for line in lines)
