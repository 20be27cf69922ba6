import errno
import os
import syslog
from unittest import mock

import pytest

from siegekit.notify import (
    Color,
    Level,
    display,
    format_notice,
    log,
    notify,
)


def test_format_notice_error_without_errno():
    assert format_notice(Level.ERROR, "boom") == "[\x1b[1;33merror\x1b[0m] boom\n"


def test_format_notice_appends_strerror():
    line = format_notice(Level.WARNING, "open", errno.ENOENT)
    assert line.endswith(": " + os.strerror(errno.ENOENT) + "\n")
    assert "alert" in line


def test_format_notice_debug_ignores_error():
    line = format_notice(Level.DEBUG, "trace", errno.ENOENT)
    assert line.endswith("] trace\n")
    assert os.strerror(errno.ENOENT) not in line


def test_format_notice_enosys_ignored():
    line = format_notice(Level.ERROR, "call", errno.ENOSYS)
    assert line.endswith("] call\n")


@pytest.mark.parametrize(
    "level,name,code",
    [(Level.DEBUG, "debug", 34), (Level.WARNING, "alert", 32),
     (Level.ERROR, "error", 33), (Level.FATAL, "fatal", 31)],
)
def test_format_notice_labels(level, name, code):
    assert format_notice(level, "x").startswith(f"[\x1b[1;{code}m{name}\x1b[0m]")


def test_notify_writes_to_stderr(capsys):
    notify(Level.ERROR, "value %d", 7)
    captured = capsys.readouterr()
    assert captured.err == format_notice(Level.ERROR, "value 7")
    assert captured.out == ""


def test_notify_uses_handled_oserror(capsys):
    try:
        raise OSError(errno.ENOENT, "missing")
    except OSError:
        notify(Level.ERROR, "reading")
    assert capsys.readouterr().err == format_notice(Level.ERROR, "reading", errno.ENOENT)


def test_notify_fatal_exits():
    with pytest.raises(SystemExit) as info:
        notify(Level.FATAL, "dead")
    assert info.value.code == 1


def test_display_plain(capsys):
    display(Color.UNCOLOR, "hello %s", "there")
    assert capsys.readouterr().out == "hello there\n"


def test_display_coloured(capsys):
    display(Color.RED, "hot")
    assert capsys.readouterr().out == "\x1b[0;31mhot\x1b[0m\n"


def test_log_sends_to_syslog(capsys):
    with mock.patch("syslog.syslog") as fake:
        log(Level.WARNING, "slow %s", "site")
    assert fake.call_args == mock.call(syslog.LOG_WARNING, "[alert]  slow site\n")
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""


def test_log_fatal_exits():
    with mock.patch("syslog.syslog") as fake:
        with pytest.raises(SystemExit) as info:
            log(Level.FATAL, "gone")
    assert info.value.code == 1
    assert fake.call_args[0][1] == "[fatal] gone\n"