import time

import pytest

from app.db.init_db import init_db
from app.db.session import ConnectionState, DatabaseMonitor, build_engine

from conftest import sqlite_url


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def test_unreachable_database_reports_disconnected(tmp_path):
    monitor = DatabaseMonitor(build_engine(sqlite_url(tmp_path / "missing" / "db.sqlite")))

    assert monitor.probe() is False
    assert monitor.state == ConnectionState.DISCONNECTED
    assert monitor.is_available() is False


def test_reachable_database_runs_on_connect_once(tmp_path):
    calls = []

    def on_connect(engine):
        calls.append(engine)
        init_db(engine)

    monitor = DatabaseMonitor(build_engine(sqlite_url(tmp_path / "db.sqlite")), on_connect=on_connect)

    assert monitor.probe() is True
    assert monitor.state == ConnectionState.CONNECTED
    assert monitor.is_available() is True
    monitor.probe()
    assert len(calls) == 1


def test_is_available_reads_state_without_connecting(tmp_path):
    db_dir = tmp_path / "later"
    monitor = DatabaseMonitor(build_engine(sqlite_url(db_dir / "db.sqlite")))
    assert monitor.probe() is False

    # The database is reachable now, but only a probe may notice it
    db_dir.mkdir()
    assert monitor.is_available() is False
    assert monitor.probe() is True
    assert monitor.is_available() is True


def test_reconnect_loop_picks_up_database_that_appears_later(tmp_path):
    db_dir = tmp_path / "later"
    monitor = DatabaseMonitor(
        build_engine(sqlite_url(db_dir / "db.sqlite")), reconnect_interval=0.05, on_connect=init_db
    )
    assert monitor.probe() is False

    monitor.start()
    try:
        db_dir.mkdir()
        assert wait_for(monitor.is_available)
        assert monitor.state == ConnectionState.CONNECTED
    finally:
        monitor.dispose()


def test_failing_on_connect_leaves_monitor_disconnected(tmp_path):
    attempts = []

    def on_connect(engine):
        attempts.append(engine)
        if len(attempts) == 1:
            raise RuntimeError("table setup failed")

    monitor = DatabaseMonitor(build_engine(sqlite_url(tmp_path / "db.sqlite")), on_connect=on_connect)

    with pytest.raises(RuntimeError):
        monitor.probe()
    assert monitor.state == ConnectionState.DISCONNECTED
    assert monitor.is_available() is False

    # Not stuck: the next attempt runs and succeeds
    assert monitor.probe() is True
    assert len(attempts) == 2


def test_reconnect_loop_survives_on_connect_errors(tmp_path):
    attempts = []

    def on_connect(engine):
        attempts.append(engine)
        if len(attempts) < 3:
            raise RuntimeError("table setup failed")

    monitor = DatabaseMonitor(
        build_engine(sqlite_url(tmp_path / "db.sqlite")), reconnect_interval=0.01, on_connect=on_connect
    )
    monitor.start()
    try:
        assert wait_for(monitor.is_available)
        assert len(attempts) == 3
    finally:
        monitor.dispose()
