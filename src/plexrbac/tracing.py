"""Stack-trace capture strategies for domain errors.

A capturer is chosen once, when the application is configured, and every
DomainError built afterwards asks it for a trace. Nothing is selected at
construction time.

    NativeCapturer  : walks interpreter frames via sys._getframe
    FallbackCapturer: raises a throwaway Exception and formats its traceback
    NullCapturer    : records nothing
"""

import sys
import traceback
from collections.abc import Callable
from types import FrameType
from typing import Protocol

from plexrbac.config import TraceCaptureMode

FrameGetter = Callable[[int], FrameType]


class TraceCapturer(Protocol):
    """Something that can produce a formatted stack for a freshly built error."""

    @property
    def available(self) -> bool: ...

    def capture(self, owner: object | None = None) -> str | None:
        """Return the caller's formatted stack.

        Frames whose ``self`` is ``owner`` are left out, so an error's own
        constructor chain never shows up in its trace.
        """
        ...


class NativeCapturer:
    """Capture using the interpreter's frame introspection facility.

    ``facility`` defaults to ``sys._getframe``, which is a CPython
    implementation detail. Pass ``None`` to model a runtime without it.
    """

    def __init__(self, facility: FrameGetter | None = getattr(sys, "_getframe", None)) -> None:
        self._facility = facility

    @property
    def available(self) -> bool:
        return self._facility is not None

    def capture(self, owner: object | None = None) -> str | None:
        if self._facility is None:
            return None
        # depth 1 is whoever called capture()
        frame: FrameType | None = self._facility(1)
        while frame is not None and owner is not None and frame.f_locals.get("self") is owner:
            frame = frame.f_back
        if frame is None:
            return None
        return "".join(traceback.format_stack(frame))


class FallbackCapturer:
    """Capture by raising a plain Exception and formatting what it carries.

    The resulting text only covers the raise site, not the caller chain, so
    its content is diagnostic at best.
    """

    available = True

    def capture(self, owner: object | None = None) -> str | None:
        try:
            raise Exception("trace capture")
        except Exception as marker:
            return "".join(traceback.format_exception(marker))


class NullCapturer:
    """Record no trace at all."""

    available = False

    def capture(self, owner: object | None = None) -> str | None:
        return None


def select_capturer(mode: TraceCaptureMode, native: NativeCapturer | None = None) -> TraceCapturer:
    """Pick a capturer for the given mode.

    ``native`` lets callers supply the native candidate (tests disable the
    facility this way). Asking for ``native`` on a runtime without the facility
    degrades to the fallback.
    """
    native = native or NativeCapturer()
    if mode == "none":
        return NullCapturer()
    if mode == "fallback":
        return FallbackCapturer()
    if native.available:
        return native
    return FallbackCapturer()


_capturer: TraceCapturer = select_capturer("auto")


def configure_trace_capture(capturer: TraceCapturer) -> None:
    """Install the process-wide capturer used by every DomainError."""
    global _capturer
    _capturer = capturer


def get_trace_capturer() -> TraceCapturer:
    return _capturer
