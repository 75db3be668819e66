# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from sniprobe.config import ProbeSettings
from sniprobe.errors import RequestFileError
from sniprobe.models import ProbeTarget
from sniprobe.request_file import load_request_file, override, parse_request_lines, to_bool

SAMPLE = """url: https://example.com/path?q=1
user-agent:  Probe/2.0
cookie: sid=abc; theme=dark
header-output: true
body-output: 0
1.2.3.4
  5.6.7.8

[2001:db8::1]
"""


@pytest.mark.parametrize(
    "raw, expected",
    [("", False), ("  ", False), ("0", False), ("false", False), (" FALSE ", False), ("true", True), ("1", True), ("no", True)],
)
def test_to_bool(raw, expected):
    assert to_bool(raw) is expected


def test_parse_request_lines_reads_options_and_targets():
    settings = ProbeSettings(timeout=3.0, user_agent="Default/1.0", verify_ssl=False)
    request = parse_request_lines(SAMPLE.splitlines(keepends=True), settings)

    config = request.config
    assert config.base_url == "https://example.com/path?q=1"
    assert config.user_agent == "Probe/2.0"
    assert config.cookie == "sid=abc; theme=dark"
    assert config.capture_headers is True
    assert config.capture_body is False
    assert config.timeout == 3.0
    assert config.default_user_agent == "Default/1.0"
    assert config.verify_ssl is False
    assert request.targets == [ProbeTarget("1.2.3.4"), ProbeTarget("5.6.7.8"), ProbeTarget("[2001:db8::1]")]


def test_no_ip_lines_yields_single_baseline_target():
    request = parse_request_lines(["url: https://example.com/\n", "\n"], ProbeSettings())
    assert request.targets == [ProbeTarget()]


def test_all_targets_share_one_config():
    request = parse_request_lines(["url: https://example.com/", "1.1.1.1", "2.2.2.2"], ProbeSettings())
    assert len(request.targets) == 2
    assert request.config.base_url == "https://example.com/"


def test_load_request_file(tmp_path):
    path = tmp_path / "request.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    request = load_request_file(path, ProbeSettings())
    assert request.config.base_url == "https://example.com/path?q=1"
    assert len(request.targets) == 3


def test_load_request_file_missing(tmp_path):
    with pytest.raises(RequestFileError):
        load_request_file(tmp_path / "missing.txt", ProbeSettings())


def test_override_replaces_url_and_targets():
    request = parse_request_lines(["url: https://example.com/", "1.1.1.1"], ProbeSettings())
    updated = override(request, url="https://other.example/", ips=[" 9.9.9.9 "])
    assert updated.config.base_url == "https://other.example/"
    assert updated.targets == [ProbeTarget("9.9.9.9")]
    assert override(request).targets == request.targets
