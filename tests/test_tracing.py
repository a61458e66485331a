"""Unit tests for trace capturer selection."""

import pytest

from plexrbac.tracing import (
    FallbackCapturer,
    NativeCapturer,
    NullCapturer,
    configure_trace_capture,
    get_trace_capturer,
    select_capturer,
)


def test_native_capturer_is_available_on_cpython() -> None:
    assert NativeCapturer().available is True


def test_native_capturer_without_facility_captures_nothing() -> None:
    capturer = NativeCapturer(facility=None)

    assert capturer.available is False
    assert capturer.capture() is None


def test_native_capture_includes_caller() -> None:
    stack = NativeCapturer().capture()

    assert stack is not None
    assert "test_native_capture_includes_caller" in stack


def test_native_capture_skips_owner_frames() -> None:
    class Owner:
        def __init__(self) -> None:
            self.stack = NativeCapturer().capture(owner=self)

    stack = Owner().stack

    assert stack is not None
    assert "test_native_capture_skips_owner_frames" in stack
    assert "in __init__\n" not in stack


def test_fallback_capture_is_non_empty() -> None:
    assert FallbackCapturer().capture()


@pytest.mark.parametrize(
    "mode, native, expected",
    [
        ("auto", NativeCapturer(), NativeCapturer),
        ("native", NativeCapturer(), NativeCapturer),
        ("auto", NativeCapturer(facility=None), FallbackCapturer),
        ("native", NativeCapturer(facility=None), FallbackCapturer),
        ("fallback", NativeCapturer(), FallbackCapturer),
        ("none", NativeCapturer(), NullCapturer),
    ],
    ids=[
        "auto_native",
        "native",
        "auto_without_facility",
        "native_without_facility",
        "fallback",
        "none",
    ],
)
def test_select_capturer(mode: str, native: NativeCapturer, expected: type) -> None:
    assert isinstance(select_capturer(mode, native=native), expected)  # type: ignore[arg-type]


def test_configure_trace_capture_installs_capturer() -> None:
    capturer = NullCapturer()

    configure_trace_capture(capturer)

    assert get_trace_capturer() is capturer
