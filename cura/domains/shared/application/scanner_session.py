"""
QR Scanner Session

Owns the camera for the lifetime of one scan dialog. The camera is
acquired on open and released on close, on a successful scan, on error
and on context exit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from cura.domains.shared.application.ports import CameraPort
from cura.domains.shared.domain.services.qr_payload_decoder import extract_identifier

logger = logging.getLogger(__name__)


class ScannerState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    SUCCEEDED = "succeeded"
    ERROR = "error"
    CLOSED = "closed"


class ScannerError(Exception):
    """Camera unavailable, permission denied or already in use."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class DecodeFailure:
    """A payload was read but held no appointment identifier."""

    raw: str

    @property
    def message(self) -> str:
        return f"The scanned QR code doesn't contain a valid appointment ID. Raw data: {self.raw[:50]}..."


class ScannerSession:
    """
    Exclusive scanning session over a CameraPort.

    Duplicate frames of the last accepted payload are ignored. A payload
    that does not decode is reported as a DecodeFailure and forgotten, so
    the same code can be tried again.

    Example:
        async with ScannerSession(camera) as session:
            appointment_id = await session.scan()
    """

    _active_cameras: ClassVar[set[int]] = set()

    def __init__(
        self,
        camera: CameraPort,
        decoder: Callable[[str], str | None] = extract_identifier,
        on_decode_failure: Callable[[DecodeFailure], Any] | None = None,
    ):
        self._camera = camera
        self._decoder = decoder
        self._on_decode_failure = on_decode_failure
        self._acquired = False
        self._last_scanned: str | None = None
        self.state = ScannerState.IDLE
        self.error: str | None = None
        self.result: str | None = None
        self.failures: list[DecodeFailure] = []

    @property
    def is_scanning(self) -> bool:
        return self.state is ScannerState.SCANNING

    async def __aenter__(self) -> ScannerSession:
        await self.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def open(self) -> None:
        """
        Acquire the camera and start scanning.

        Raises:
            ScannerError: Camera busy or failed to start; session is in ERROR
        """
        if self._acquired:
            return
        camera_key = id(self._camera)
        if camera_key in self._active_cameras:
            self._fail("Camera is already in use by another scanner")
            raise ScannerError(self.error or "")

        self._active_cameras.add(camera_key)
        self._acquired = True
        self.result = None
        self._last_scanned = None
        try:
            await self._camera.start()
        except Exception as e:
            logger.error(f"Camera start failed: {e}")
            await self._release()
            self._fail("Camera access denied or unavailable. Please allow camera access and try again.")
            raise ScannerError(self.error or "") from e

        self.error = None
        self.state = ScannerState.SCANNING
        logger.debug("Scanner started")

    async def submit(self, raw: str | None) -> str | None:
        """
        Process one decoded frame.

        Returns:
            Appointment identifier on success (the camera is released), else None
        """
        if self.state is not ScannerState.SCANNING or not raw:
            return None
        if raw == self._last_scanned:
            return None
        self._last_scanned = raw

        appointment_id = self._decoder(raw)
        if appointment_id is None:
            failure = DecodeFailure(raw)
            logger.info("No valid appointment ID found in QR data")
            self.failures.append(failure)
            self._last_scanned = None
            if self._on_decode_failure is not None:
                self._on_decode_failure(failure)
            return None

        logger.info(f"Extracted appointment ID: {appointment_id}")
        self.result = appointment_id
        await self._release()
        self.state = ScannerState.SUCCEEDED
        return appointment_id

    async def scan(self, max_frames: int | None = None) -> str | None:
        """
        Read frames until an identifier is found.

        Args:
            max_frames: Stop after this many frames (None: until success)

        Returns:
            Identifier, or None when max_frames was reached

        Raises:
            ScannerError: The camera failed while reading
        """
        if self.state is not ScannerState.SCANNING:
            await self.open()

        frames = 0
        while max_frames is None or frames < max_frames:
            frames += 1
            try:
                raw = await self._camera.read_payload()
            except Exception as e:
                logger.error(f"Camera read failed: {e}")
                await self._release()
                self._fail("Camera stopped unexpectedly. Please retry.")
                raise ScannerError(self.error or "") from e
            found = await self.submit(raw)
            if found is not None:
                return found
        return None

    async def retry(self) -> None:
        """Tear down completely and start again."""
        await self._release()
        self.error = None
        self.state = ScannerState.IDLE
        self._last_scanned = None
        await self.open()

    async def close(self) -> None:
        await self._release()
        self._last_scanned = None
        if self.state is ScannerState.SCANNING or self.state is ScannerState.IDLE:
            self.state = ScannerState.CLOSED

    def _fail(self, message: str) -> None:
        self.error = message
        self.state = ScannerState.ERROR

    async def _release(self) -> None:
        if not self._acquired:
            return
        self._acquired = False
        self._active_cameras.discard(id(self._camera))
        await self._camera.stop()
        logger.debug("Scanner released")
