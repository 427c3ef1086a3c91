"""
Tests for the server command line.
"""

import pytest

from chuk_block_style.constants import LIBRARY_PATH_ENV, PROJECT_PATH_ENV
from chuk_block_style.server import apply_path_overrides, build_parser


class TestCommandLine:
    """Tests for build_parser and apply_path_overrides."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.library is None
        assert args.project is None
        assert not args.debug

    def test_http_transport(self):
        args = build_parser().parse_args(["--transport", "http", "--port", "9000", "--debug"])
        assert args.transport == "http"
        assert args.port == 9000
        assert args.debug

    def test_unknown_transport(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "carrier-pigeon"])

    def test_path_flags_exported(self):
        args = build_parser().parse_args(["--library", "/defs", "--project", "/site/styles"])
        environ: dict[str, str] = {}

        overrides = apply_path_overrides(args, environ)

        assert environ == {LIBRARY_PATH_ENV: "/defs", PROJECT_PATH_ENV: "/site/styles"}
        assert overrides == environ

    def test_missing_flags_leave_environment(self):
        """Only the flags that were given are exported."""
        args = build_parser().parse_args(["--project", "/site/styles"])
        environ = {LIBRARY_PATH_ENV: "/kept"}

        apply_path_overrides(args, environ)

        assert environ == {LIBRARY_PATH_ENV: "/kept", PROJECT_PATH_ENV: "/site/styles"}
