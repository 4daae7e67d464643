import logging
import threading
from enum import IntEnum
from typing import Callable, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Create Base class for declarative class definitions
Base = declarative_base()


class ConnectionState(IntEnum):
    """Numeric connection state reported by the health endpoint."""
    DISCONNECTED = 0
    CONNECTED = 1
    CONNECTING = 2


def build_engine(db_url: str, connect_timeout: int = 10) -> Engine:
    """
    Create the database engine. No connection is opened until first use.

    The connect timeout bounds how long a probe may block when the
    server is unreachable.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        connect_args = {"check_same_thread": False, "timeout": connect_timeout}
    else:
        connect_args = {"connect_timeout": connect_timeout}
    return create_engine(
        url,
        pool_pre_ping=True,  # Test connections for liveness when checked out from pool
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


class DatabaseMonitor:
    """
    Tracks whether the durable database is reachable.

    The state is updated by explicit probes, by SQLAlchemy's
    ``handle_error`` event whenever a statement fails because the
    connection dropped, and by a background reconnect loop that keeps
    probing while disconnected. ``is_available`` only reads the state, so
    requests never wait on a connect timeout and a database that comes
    back mid-run is used as soon as the loop reaches it.
    """

    def __init__(
        self,
        engine: Engine,
        reconnect_interval: float = 1.0,
        on_connect: Optional[Callable[[Engine], None]] = None,
    ):
        self.engine = engine
        self.reconnect_interval = reconnect_interval
        self.on_connect = on_connect
        self.state = ConnectionState.DISCONNECTED
        self._probe_lock = threading.Lock()
        self._stop = threading.Event()
        self._reconnect_thread: Optional[threading.Thread] = None
        event.listen(engine, "handle_error", self._handle_error)

    def _handle_error(self, context) -> None:
        if context.is_disconnect and self.state == ConnectionState.CONNECTED:
            logger.warning(f"Lost connection to database: {context.original_exception}")
            self.state = ConnectionState.DISCONNECTED

    def probe(self) -> bool:
        """Try to reach the database once and record the outcome."""
        if not self._probe_lock.acquire(blocking=False):
            # Another thread is already probing
            return self.state == ConnectionState.CONNECTED

        was_connected = self.state == ConnectionState.CONNECTED
        connected = False
        self.state = ConnectionState.CONNECTING
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            if not was_connected and self.on_connect is not None:
                self.on_connect(self.engine)
            connected = True
        except SQLAlchemyError as e:
            logger.warning(f"Database unreachable: {e}")
        finally:
            self.state = ConnectionState.CONNECTED if connected else ConnectionState.DISCONNECTED
            self._probe_lock.release()

        if connected and not was_connected:
            logger.info("Database connected successfully")
        return connected

    def is_available(self) -> bool:
        """Whether operations should go to the durable database right now."""
        return self.state == ConnectionState.CONNECTED

    def _reconnect_loop(self) -> None:
        while not self._stop.wait(self.reconnect_interval):
            if self.state != ConnectionState.DISCONNECTED:
                continue
            try:
                self.probe()
            except Exception:
                logger.exception("Reconnect attempt failed")

    def start(self) -> None:
        """Start the background reconnect loop."""
        if self._reconnect_thread is not None:
            return
        self._stop.clear()
        self._reconnect_thread = threading.Thread(
            target=self._reconnect_loop, name="db-reconnect", daemon=True
        )
        self._reconnect_thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._reconnect_thread is not None:
            self._reconnect_thread.join(timeout=self.reconnect_interval + 1)
            self._reconnect_thread = None

    def dispose(self) -> None:
        self.stop()
        self.engine.dispose()
