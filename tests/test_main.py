import logging

import pytest
import requests

from statprobe.main import main

from conftest import FakeSession

FAST = ["--interval", "0.001"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("STATPROBE_URL", "STATPROBE_INTERVAL", "STATPROBE_TIMEOUT",
                 "STATPROBE_MAX_ERRORS"):
        monkeypatch.delenv(name, raising=False)


def test_gives_up_after_three_failures(capsys):
    session = FakeSession([requests.ConnectionError("down")] * 3)
    assert main(FAST, session=session) == 0
    assert capsys.readouterr().out == "Unable to fetch server statistic\n"
    assert len(session.calls) == 3
    assert session.closed


def test_warnings_then_give_up(capsys):
    session = FakeSession([
        "35,100,85,100,10,100,10\n",
        "1,2,3",
        "1,100,10,100,10,100,10",
        "bad",
    ])
    assert main(FAST + ["--url", "http://cli.test/_stats", "--timeout", "0.5"],
                session=session) == 0
    assert capsys.readouterr().out == (
        "Load Average is too high: 35\n"
        "Memory usage too high: 85%\n"
        "Unable to fetch server statistic\n"
    )
    assert session.calls[0] == ("http://cli.test/_stats", 0.5)
    # one success, then "1,2,3", success, "bad" and two exhausted-queue errors
    assert len(session.calls) == 6


def test_max_errors_flag(capsys):
    session = FakeSession()
    main(FAST + ["--max-errors", "1"], session=session)
    assert len(session.calls) == 1
    assert capsys.readouterr().out == "Unable to fetch server statistic\n"


def test_env_url_used_when_flag_absent(monkeypatch):
    monkeypatch.setenv("STATPROBE_URL", "http://env.test/_stats")
    session = FakeSession()
    main(FAST, session=session)
    assert session.calls[0][0] == "http://env.test/_stats"


def test_verbose_logs_to_stderr_only(capsys):
    session = FakeSession()
    main(FAST + ["--verbose"], session=session)
    captured = capsys.readouterr()
    assert captured.out == "Unable to fetch server statistic\n"
    assert "[DEBUG] Fetch failed (TRANSPORT)" in captured.err
    assert "[ERROR] Giving up after 3 consecutive failed fetches" in captured.err
    assert logging.getLogger("statprobe").propagate is False


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "probe.log"
    main(FAST + ["--log-file", str(log_file)], session=FakeSession())
    text = log_file.read_text()
    assert "Polling " in text
    assert "Consecutive failures: 3/3" in text
    assert capsys.readouterr().err == "[ERROR] Giving up after 3 consecutive failed fetches of " \
        "http://srv.msk01.gigacorp.local/_stats\n"


def test_interrupt_exits_cleanly(monkeypatch):
    def interrupt(self):
        raise KeyboardInterrupt

    monkeypatch.setattr("statprobe.core.poller.Poller.run", interrupt)
    session = FakeSession()
    assert main(FAST, session=session) == 0
    assert session.closed
