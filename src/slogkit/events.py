"""Application lifecycle events and their logger.

A dependency-injection container reports what it does (constructors
provided, functions invoked, hooks run, start/stop outcomes) as event
objects. EventLogger writes them through a Logger: ordinary events at the
FX level and failures at FX_ERROR, so they can be filtered or colored apart
from application logs.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass, field
from datetime import timedelta

from slogkit.level import FX, FX_ERROR
from slogkit.logger import Logger
from slogkit.value import Attr, Value


@dataclass
class HookExecuting:
    """A start or stop hook is about to run."""

    hook: str
    function_name: str
    caller_name: str


@dataclass
class HookExecuted:
    """A start or stop hook finished, successfully or not."""

    hook: str
    function_name: str
    caller_name: str
    runtime: timedelta = field(default_factory=timedelta)
    err: BaseException | None = None


@dataclass
class Supplied:
    """A value was supplied directly to the container."""

    type_name: str
    module_name: str = ""
    stack_trace: list[str] = field(default_factory=list)
    module_trace: list[str] = field(default_factory=list)
    err: BaseException | None = None


@dataclass
class Provided:
    """A constructor was registered."""

    constructor_name: str
    output_type_names: list[str] = field(default_factory=list)
    module_name: str = ""
    private: bool = False
    stack_trace: list[str] = field(default_factory=list)
    module_trace: list[str] = field(default_factory=list)
    err: BaseException | None = None


@dataclass
class Replaced:
    """Values were replaced in the container."""

    output_type_names: list[str] = field(default_factory=list)
    module_name: str = ""
    stack_trace: list[str] = field(default_factory=list)
    module_trace: list[str] = field(default_factory=list)
    err: BaseException | None = None


@dataclass
class Decorated:
    """A decorator was registered."""

    decorator_name: str
    output_type_names: list[str] = field(default_factory=list)
    module_name: str = ""
    stack_trace: list[str] = field(default_factory=list)
    module_trace: list[str] = field(default_factory=list)
    err: BaseException | None = None


@dataclass
class Run:
    """A constructor or decorator ran."""

    name: str
    kind: str
    module_name: str = ""
    err: BaseException | None = None


@dataclass
class Invoking:
    """A function is about to be invoked."""

    function_name: str
    module_name: str = ""


@dataclass
class Invoked:
    """A function was invoked; only failures are logged."""

    function_name: str
    module_name: str = ""
    trace: str = ""
    err: BaseException | None = None


@dataclass
class Stopping:
    """The application received a signal and is stopping."""

    signal: signal.Signals | str


@dataclass
class Stopped:
    err: BaseException | None = None


@dataclass
class RollingBack:
    start_err: BaseException


@dataclass
class RolledBack:
    err: BaseException | None = None


@dataclass
class Started:
    err: BaseException | None = None


@dataclass
class LoggerInitialized:
    constructor_name: str = ""
    err: BaseException | None = None


LifecycleEvent = (
    HookExecuting
    | HookExecuted
    | Supplied
    | Provided
    | Replaced
    | Decorated
    | Run
    | Invoking
    | Invoked
    | Stopping
    | Stopped
    | RollingBack
    | RolledBack
    | Started
    | LoggerInitialized
)


def _err(err: BaseException) -> Attr:
    return Attr("error", Value.string(str(err)))


def _module(name: str) -> list[Attr]:
    if not name:
        return []
    return [Attr("module", Value.string(name))]


def _strings(key: str, values: list[str]) -> Attr:
    return Attr(key, Value.group(*(Attr(str(i), Value.string(v)) for i, v in enumerate(values))))


def _signal_name(sig: signal.Signals | str) -> str:
    if isinstance(sig, signal.Signals):
        return sig.name
    return str(sig).upper()


class EventLogger:
    """Logs lifecycle events through a Logger.

    Args:
        logger: Destination logger.
        level: Level of ordinary events.
        error_level: Level of failure events.
    """

    def __init__(self, logger: Logger, level: int = FX, error_level: int = FX_ERROR) -> None:
        self.logger = logger
        self.level = level
        self.error_level = error_level

    def _event(self, msg: str, *attrs: Attr) -> None:
        self.logger.log(self.level, msg, *attrs)

    def _error(self, msg: str, *attrs: Attr) -> None:
        self.logger.log(self.error_level, msg, *attrs)

    def log_event(self, event: LifecycleEvent) -> None:
        """Log one event. Unknown event types are ignored."""
        e = event
        if isinstance(e, HookExecuting):
            self._event(
                f"{e.hook} hook executing",
                Attr("callee", Value.string(e.function_name)),
                Attr("caller", Value.string(e.caller_name)),
            )
        elif isinstance(e, HookExecuted):
            callee = Attr("callee", Value.string(e.function_name))
            caller = Attr("caller", Value.string(e.caller_name))
            if e.err is not None:
                self._error(f"{e.hook} hook failed", callee, caller, _err(e.err))
            else:
                self._event(
                    f"{e.hook} hook executed",
                    callee,
                    caller,
                    Attr("runtime", Value.duration(e.runtime)),
                )
        elif isinstance(e, Supplied):
            if e.err is not None:
                self._error(
                    "error encountered while applying options",
                    Attr("type", Value.string(e.type_name)),
                    _strings("moduletrace", e.module_trace),
                    _strings("stacktrace", e.stack_trace),
                    *_module(e.module_name),
                    _err(e.err),
                )
            else:
                self._event(
                    "supplied",
                    Attr("type", Value.string(e.type_name)),
                    *_module(e.module_name),
                )
        elif isinstance(e, Provided):
            for type_name in e.output_type_names:
                private = [Attr("private", Value.boolean(True))] if e.private else []
                self._event(
                    "provided",
                    Attr("constructor", Value.string(e.constructor_name)),
                    *_module(e.module_name),
                    Attr("type", Value.string(type_name)),
                    *private,
                )
            if e.err is not None:
                self._error(
                    "error encountered while applying options",
                    *_module(e.module_name),
                    _strings("stacktrace", e.stack_trace),
                    _strings("moduletrace", e.module_trace),
                    _err(e.err),
                )
        elif isinstance(e, Replaced):
            for type_name in e.output_type_names:
                self._event(
                    "replaced",
                    *_module(e.module_name),
                    Attr("type", Value.string(type_name)),
                )
            if e.err is not None:
                self._error(
                    "error encountered while replacing",
                    _strings("stacktrace", e.stack_trace),
                    _strings("moduletrace", e.module_trace),
                    *_module(e.module_name),
                    _err(e.err),
                )
        elif isinstance(e, Decorated):
            for type_name in e.output_type_names:
                self._event(
                    "decorated",
                    Attr("decorator", Value.string(e.decorator_name)),
                    *_module(e.module_name),
                    Attr("type", Value.string(type_name)),
                )
            if e.err is not None:
                self._error(
                    "error encountered while applying options",
                    _strings("stacktrace", e.stack_trace),
                    _strings("moduletrace", e.module_trace),
                    *_module(e.module_name),
                    _err(e.err),
                )
        elif isinstance(e, Run):
            attrs = [
                Attr("name", Value.string(e.name)),
                Attr("kind", Value.string(e.kind)),
                *_module(e.module_name),
            ]
            if e.err is not None:
                self._error("error returned", *attrs, _err(e.err))
            else:
                self._event("run", *attrs)
        elif isinstance(e, Invoking):
            # The stack is left out; it makes the output hard to read.
            self._event(
                "invoking",
                Attr("function", Value.string(e.function_name)),
                *_module(e.module_name),
            )
        elif isinstance(e, Invoked):
            if e.err is not None:
                self._error(
                    "invoke failed",
                    _err(e.err),
                    Attr("stack", Value.string(e.trace)),
                    Attr("function", Value.string(e.function_name)),
                    *_module(e.module_name),
                )
        elif isinstance(e, Stopping):
            self._event(
                "received signal",
                Attr("signal", Value.string(_signal_name(e.signal))),
            )
        elif isinstance(e, Stopped):
            if e.err is not None:
                self._error("stop failed", _err(e.err))
        elif isinstance(e, RollingBack):
            self._error("start failed, rolling back", _err(e.start_err))
        elif isinstance(e, RolledBack):
            if e.err is not None:
                self._error("rollback failed", _err(e.err))
        elif isinstance(e, Started):
            if e.err is not None:
                self._error("start failed", _err(e.err))
            else:
                self._event("started")
        elif isinstance(e, LoggerInitialized):
            if e.err is not None:
                self._error("custom logger initialization failed", _err(e.err))
            else:
                self._event(
                    "initialized custom event logger",
                    Attr("function", Value.string(e.constructor_name)),
                )
