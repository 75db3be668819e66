# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

from sniprobe.log import TRANSPORT_LOGGERS, setup_logging


def test_setup_logging_quiets_transport_loggers(monkeypatch):
    for name in TRANSPORT_LOGGERS:
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)
    setup_logging("info")
    assert all(logging.getLogger(name).level == logging.WARNING for name in TRANSPORT_LOGGERS)


def test_setup_logging_debug_keeps_transport_loggers(monkeypatch):
    for name in TRANSPORT_LOGGERS:
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)
    setup_logging("debug")
    assert all(logging.getLogger(name).level == logging.NOTSET for name in TRANSPORT_LOGGERS)
