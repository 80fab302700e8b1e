"""Tests for the line renderer and the round-trip property."""

import pytest

from hosty.formatter import render_line, render_lines
from hosty.models import HostsFileLine, LineType
from hosty.parser import parse_hosts_text, parse_ip, parse_line


class TestRenderLine:
    """Verify each record type renders to its canonical text."""

    def test_empty(self) -> None:
        assert render_line(HostsFileLine(line_type=LineType.EMPTY, raw="   ")) == ""

    def test_comment(self) -> None:
        assert render_line(HostsFileLine(line_type=LineType.COMMENT, comment="note")) == "# note"

    def test_empty_comment(self) -> None:
        assert render_line(HostsFileLine(line_type=LineType.COMMENT)) == "#"

    def test_address(self) -> None:
        line = HostsFileLine(
            line_type=LineType.ADDRESS,
            address=parse_ip("10.0.0.1"),
            hostnames=["bar.local", "baz.local"],
        )
        assert render_line(line) == "10.0.0.1\tbar.local baz.local"

    def test_commented_address_with_comment(self) -> None:
        line = HostsFileLine(
            line_type=LineType.ADDRESS,
            address=parse_ip("10.0.0.2"),
            hostnames=["old.local"],
            comment="retired",
            is_commented=True,
        )
        assert render_line(line) == "# 10.0.0.2\told.local\t# retired"

    def test_unknown_is_identity(self) -> None:
        raw = "  some   garbage\t"
        assert render_line(parse_line(raw)) == raw


class TestRenderLines:
    """Verify whole-document rendering and round trips."""

    def test_no_trailing_newline_added(self) -> None:
        lines = [parse_line("# a"), parse_line("# b")]
        assert render_lines(lines) == "# a\n# b"

    @pytest.mark.parametrize("text", [
        "127.0.0.1\tlocalhost",
        "127.0.0.1\tlocalhost\n# note\n\n10.0.0.1\tbar.local baz.local\n",
        "# 10.0.0.2\tdisabled.local\t# old box\n::1\tlocalhost ip6-localhost",
        "127.0.0.1\tlocalhost\n%%% unparsable %%%\n",
        "",
    ])
    def test_canonical_text_round_trips_exactly(self, text: str) -> None:
        assert render_lines(parse_hosts_text(text)) == text

    @pytest.mark.parametrize("text", [
        "192.168.1.1\tfoo.local\n# note\n\n10.0.0.1\tbar.local\tbaz.local",
        "127.0.0.1   LocalHost   loopback   #   loop\n#note",
        "#10.0.0.9 x.local y.local\n##double",
    ])
    def test_normalization_is_idempotent(self, text: str) -> None:
        once = render_lines(parse_hosts_text(text))
        twice = render_lines(parse_hosts_text(once))
        assert twice == once

    def test_comment_whitespace_is_preserved(self) -> None:
        text = "#\tStatic table lookup for hostnames.\n#   See hosts(5) for details.\n127.0.0.1\tlocalhost"
        assert render_lines(parse_hosts_text(text)) == text

    def test_separator_normalization(self) -> None:
        text = "10.0.0.1   Bar.local\tbaz.local  # build"
        assert render_lines(parse_hosts_text(text)) == "10.0.0.1\tbar.local baz.local\t# build"
