# ============================================================================
# Tests for the exclusive QR scanner session
# ============================================================================
"""Unit tests for ScannerSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cura.domains.shared.application.scanner_session import (
    DecodeFailure,
    ScannerError,
    ScannerSession,
    ScannerState,
)

UUID = "f47ac10b-58cc-4372-a567-0e02b2c3d479"


def make_camera(payloads: list | None = None) -> MagicMock:
    camera = MagicMock()
    camera.start = AsyncMock()
    camera.stop = AsyncMock()
    camera.read_payload = AsyncMock(side_effect=list(payloads or []))
    return camera


class TestScannerLifecycle:
    """Tests for acquiring and releasing the camera."""

    @pytest.mark.asyncio
    async def test_open_starts_camera(self) -> None:
        camera = make_camera()
        session = ScannerSession(camera)

        await session.open()

        camera.start.assert_awaited_once()
        assert session.state is ScannerState.SCANNING
        await session.close()
        camera.stop.assert_awaited_once()
        assert session.state is ScannerState.CLOSED

    @pytest.mark.asyncio
    async def test_successful_scan_releases_camera(self) -> None:
        camera = make_camera([None, f'{{"appointmentId": "{UUID}"}}'])

        async with ScannerSession(camera) as session:
            result = await session.scan()

        assert result == UUID
        assert session.state is ScannerState.SUCCEEDED
        camera.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_second_session_on_same_camera_is_refused(self) -> None:
        camera = make_camera()
        first = ScannerSession(camera)
        await first.open()

        second = ScannerSession(camera)
        with pytest.raises(ScannerError):
            await second.open()
        assert second.state is ScannerState.ERROR

        await first.close()
        await second.retry()
        assert second.state is ScannerState.SCANNING
        await second.close()

    @pytest.mark.asyncio
    async def test_camera_failure_and_retry(self) -> None:
        camera = make_camera()
        camera.start.side_effect = [PermissionError("denied"), None]
        session = ScannerSession(camera)

        with pytest.raises(ScannerError):
            await session.open()
        assert session.state is ScannerState.ERROR
        assert session.error

        await session.retry()
        assert session.state is ScannerState.SCANNING
        assert session.error is None
        await session.close()

    @pytest.mark.asyncio
    async def test_read_failure_releases_camera(self) -> None:
        camera = make_camera()
        camera.read_payload.side_effect = OSError("stream ended")
        session = ScannerSession(camera)
        await session.open()

        with pytest.raises(ScannerError):
            await session.scan()

        camera.stop.assert_awaited_once()
        assert session.state is ScannerState.ERROR


class TestScannerDecoding:
    """Tests for duplicate suppression and decode failures."""

    @pytest.mark.asyncio
    async def test_decode_failure_is_reported_and_scanning_continues(self) -> None:
        failures: list[DecodeFailure] = []
        camera = make_camera()
        session = ScannerSession(camera, on_decode_failure=failures.append)
        await session.open()

        assert await session.submit("hello world") is None

        assert session.state is ScannerState.SCANNING
        assert [f.raw for f in failures] == ["hello world"]
        assert "doesn't contain a valid appointment ID" in failures[0].message
        camera.stop.assert_not_awaited()
        await session.close()

    @pytest.mark.asyncio
    async def test_same_bad_code_can_be_retried(self) -> None:
        failures: list[DecodeFailure] = []
        session = ScannerSession(make_camera(), on_decode_failure=failures.append)
        await session.open()

        await session.submit("garbage")
        await session.submit("garbage")

        assert len(failures) == 2
        await session.close()

    @pytest.mark.asyncio
    async def test_frames_after_success_are_ignored(self) -> None:
        decoder = MagicMock(return_value=UUID)
        session = ScannerSession(make_camera(), decoder=decoder)
        await session.open()

        assert await session.submit(UUID) == UUID
        assert await session.submit(UUID) is None

        assert decoder.call_count == 1
        assert session.result == UUID

    @pytest.mark.asyncio
    async def test_scan_stops_after_max_frames(self) -> None:
        camera = make_camera([None, None, None])
        session = ScannerSession(camera)

        assert await session.scan(max_frames=3) is None
        assert session.state is ScannerState.SCANNING
        await session.close()
