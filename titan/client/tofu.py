import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from . import constants, exceptions
from .rwlock import ReadWriteLock

logger = logging.getLogger(constants.LOGGER_NAME)

TOFU_DB_NAME = "tofu.db"


class TrustStore(ABC):
    """Store of the leaf certificate last seen for each host."""

    @abstractmethod
    def lookup(self, hostname: str) -> Optional[bytes]:
        """
        Look up the certificate recorded for the host.

        :param hostname: an ASCII DNS name.
        :return: the DER bytes of the certificate, or None if the host was never seen.
        :raises StoreError: the store could not be read.
        """

    @abstractmethod
    def record(self, hostname: str, der: bytes) -> None:
        """
        Record the certificate of the host.

        :param hostname: an ASCII DNS name.
        :param der: the DER bytes of the leaf certificate.
        :raises StoreError: the store could not be written.
        """

    @abstractmethod
    def forget(self, hostname: str) -> None:
        """
        Remove the record of the host so the next certificate it presents is trusted.

        :param hostname: an ASCII DNS name.
        """


class SQLiteTrustStore(TrustStore):
    """Trust store kept in a sqlite database, e.g. under the user data directory."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        super().__init__()
        logger.debug("opening certificate store at %s", db_path)
        try:
            self.db_conn = sqlite3.connect(str(db_path), check_same_thread=False)
            self.db_conn.execute(
                """CREATE TABLE IF NOT EXISTS certs
                (hostname TEXT PRIMARY KEY, der BLOB NOT NULL)"""
            )
            self.db_conn.commit()
        except sqlite3.Error as db_error:
            raise exceptions.StoreError(
                f"could not open certificate store {db_path}: {db_error}"
            ) from db_error

    @classmethod
    def in_directory(cls, directory: Path) -> "SQLiteTrustStore":
        """Open the store kept in `directory`."""
        return cls(directory / TOFU_DB_NAME)

    def lookup(self, hostname: str) -> Optional[bytes]:
        try:
            row = self.db_conn.execute(
                "SELECT der FROM certs WHERE hostname=?", (hostname,)
            ).fetchone()
        except sqlite3.Error as db_error:
            raise exceptions.StoreError(str(db_error)) from db_error
        return bytes(row[0]) if row else None

    def record(self, hostname: str, der: bytes) -> None:
        logger.debug("recording certificate for %s", hostname)
        try:
            self.db_conn.execute(
                "INSERT OR REPLACE INTO certs VALUES (?, ?)", (hostname, der)
            )
            self.db_conn.commit()
        except sqlite3.Error as db_error:
            raise exceptions.StoreError(
                f"failed to write to db `{db_error}`"
            ) from db_error

    def forget(self, hostname: str) -> None:
        logger.info("forgetting certificate for %s", hostname)
        try:
            self.db_conn.execute("DELETE FROM certs WHERE hostname=?", (hostname,))
            self.db_conn.commit()
        except sqlite3.Error as db_error:
            raise exceptions.StoreError(str(db_error)) from db_error

    def close(self) -> None:
        self.db_conn.close()


class TofuVerifier:
    """
    Trust-on-first-use verification of server certificates.

    The first certificate a host presents is pinned; afterwards only that exact
    certificate is accepted. The store is shared between connections: lookups take the
    read side of the lock, first-sight inserts the write side.
    """

    store: TrustStore

    def __init__(self, store: TrustStore) -> None:
        super().__init__()
        self.store = store
        self._lock = ReadWriteLock()

    def verify(self, hostname: str, presented_certs: Sequence[bytes]) -> None:
        """
        Verify the certificate chain presented by the host.

        :param hostname: the ASCII DNS name the connection was made to.
        :param presented_certs: DER certificates, leaf first.
        :raises NoCertificatesPresentedError: the chain is empty.
        :raises CertNotValidForNameError: the leaf is not the certificate recorded for
            the host.
        """
        if not presented_certs:
            raise exceptions.NoCertificatesPresentedError(
                f"{hostname} presented no certificates"
            )
        leaf = bytes(presented_certs[0])

        with self._lock.read():
            known = self.store.lookup(hostname)

        if known is None:
            logger.debug("trusting first certificate seen for %s", hostname)
            with self._lock.write():
                # Another connection may have pinned the host in the meantime.
                known = self.store.lookup(hostname)
                if known is None:
                    self.store.record(hostname, leaf)
                    return

        if known != leaf:
            logger.warning("certificate presented by %s does not match record", hostname)
            raise exceptions.CertNotValidForNameError(
                f"certificate for {hostname} does not match the one seen before"
            )
        logger.debug("accepting previously seen certificate for %s", hostname)
