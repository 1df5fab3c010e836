"""Device switch table and the character I/O calls built on it.

Every device is reached through a small integer descriptor that indexes
the device table.  The table checks the descriptor and dispatches to the
device's operation.  A bad descriptor, or an operation the device does
not support, raises :class:`DeviceError`.

The standard configuration has two devices.  ``CONSOLE`` is a serial
terminal and ``NOTADEV`` is a null device.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, ClassVar, FrozenSet, Optional

from xinukit.printf import doprnt
from xinukit.scanf import doscan
from xinukit.tty import Tty, TtyFunc, Uart

CONSOLE = 0
NOTADEV = 1
NDEVS = 2
DEVMAXNAME = 24

CONSOLE_CSR = 0x3F8
CONSOLE_IRQ = 36


class DeviceError(Exception):
    """A bad descriptor, or an operation the device does not support."""


class Device:
    """A device table entry; every operation is unsupported by default.

    ``open``, ``close`` and ``seek`` keep the device's state; a subclass
    enables them by naming them in ``operations``.
    """

    operations: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, name: str, minor: int = 0, csr: int = 0, irq: int = 0) -> None:
        if not name or len(name) > DEVMAXNAME:
            raise ValueError(f"device name must be 1 to {DEVMAXNAME} characters")
        self.name = name
        self.minor = minor
        self.csr = csr
        self.irq = irq
        self.number: Optional[int] = None
        self.opened = False
        self.open_name = ""
        self.open_mode = ""
        self.position = 0

    def _unsupported(self, operation: str) -> DeviceError:
        return DeviceError(f"{self.name}: {operation} is not supported")

    def _require(self, operation: str) -> None:
        if operation not in self.operations:
            raise self._unsupported(operation)

    def init(self) -> None:
        """Prepare the device for use."""
        raise self._unsupported("init")

    def open(self, name: str = "", mode: str = "") -> None:
        """Open the device, remembering the name and mode it was opened with."""
        self._require("open")
        self.opened = True
        self.open_name = name
        self.open_mode = mode

    def close(self) -> None:
        """Close the device."""
        self._require("close")
        self.opened = False

    def read(self, count: int) -> str:
        """Read up to ``count`` characters."""
        raise self._unsupported("read")

    def write(self, data: str) -> None:
        """Write ``data``."""
        raise self._unsupported("write")

    def seek(self, offset: int) -> None:
        """Move to ``offset``."""
        self._require("seek")
        self.position = offset

    def getc(self) -> str:
        """Read one character; ``""`` means end of file."""
        raise self._unsupported("getc")

    def putc(self, ch) -> None:
        """Write one character."""
        raise self._unsupported("putc")

    def control(self, func: int, arg1: int = 0, arg2: int = 0) -> Any:
        """Perform a device-specific control function."""
        raise self._unsupported("control")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, minor={self.minor})"


class NullDevice(Device):
    """Discards writes and gives end of file on reads; no seek or control."""

    operations: ClassVar[FrozenSet[str]] = frozenset({"open", "close"})

    def init(self) -> None:
        self.opened = False
        self.position = 0

    def read(self, count: int) -> str:
        return ""

    def write(self, data: str) -> None:
        return None

    def getc(self) -> str:
        return ""

    def putc(self, ch) -> None:
        return None


class TtyDevice(Device):
    """A serial terminal line over a simulated UART."""

    operations: ClassVar[FrozenSet[str]] = frozenset({"open", "close"})

    def __init__(
        self,
        name: str,
        minor: int = 0,
        uart: Optional[Uart] = None,
        csr: int = CONSOLE_CSR,
        irq: int = CONSOLE_IRQ,
    ) -> None:
        super().__init__(name, minor, csr, irq)
        self.uart = uart if uart is not None else Uart()
        self.tty: Optional[Tty] = None

    def _line(self) -> Tty:
        if self.tty is None:
            raise DeviceError(f"{self.name}: device is not initialised")
        return self.tty

    def init(self) -> None:
        self.tty = Tty(self.uart)

    def read(self, count: int) -> str:
        return self._line().read(count)

    def write(self, data) -> None:
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        self._line().write(data)

    def getc(self) -> str:
        return self._line().getc()

    def putc(self, ch) -> None:
        self._line().putc(ch)

    def control(self, func: int, arg1: int = 0, arg2: int = 0) -> Any:
        try:
            return self._line().control(func, arg1, arg2)
        except ValueError as exc:
            raise DeviceError(str(exc)) from None


class _DeviceSource:
    """Character source over a device, with one character of pushback."""

    def __init__(self, table: "DeviceTable", descrp: int) -> None:
        self._table = table
        self._descrp = descrp
        self._last = ""
        self._pushed = False

    def getch(self) -> str:
        if self._pushed:
            self._pushed = False
            return self._last
        self._last = self._table.getc(self._descrp)
        return self._last

    def ungetch(self) -> None:
        self._pushed = True


class DeviceTable:
    """Devices addressed by descriptor, with the I/O calls that use them."""

    def __init__(self, devices: Iterable[Device]) -> None:
        self.devices: tuple[Device, ...] = tuple(devices)
        for number, device in enumerate(self.devices):
            device.number = number
            device.init()
        self.stdin = CONSOLE
        self.stdout = CONSOLE
        self.stderr = CONSOLE

    def __len__(self) -> int:
        return len(self.devices)

    def __getitem__(self, descrp: int) -> Device:
        return self._device(descrp)

    @property
    def names(self) -> Sequence[str]:
        """Device names in descriptor order."""
        return [device.name for device in self.devices]

    def _device(self, descrp: int) -> Device:
        if not isinstance(descrp, int) or not 0 <= descrp < len(self.devices):
            raise DeviceError(f"bad device descriptor {descrp!r}")
        return self.devices[descrp]

    def close(self, descrp: int) -> None:
        """Close a device."""
        self._device(descrp).close()

    def control(self, descrp: int, func: int, arg1: int = 0, arg2: int = 0) -> Any:
        """Run a control function on a device and return its result."""
        return self._device(descrp).control(func, arg1, arg2)

    def getc(self, descrp: int) -> str:
        """Read one character; ``""`` means end of file."""
        return self._device(descrp).getc()

    def putc(self, descrp: int, ch) -> None:
        """Write one character."""
        self._device(descrp).putc(ch)

    def read(self, descrp: int, count: int) -> str:
        """Read up to ``count`` characters."""
        return self._device(descrp).read(count)

    def write(self, descrp: int, data) -> None:
        """Write ``data``."""
        self._device(descrp).write(data)

    def fgetc(self, descrp: int) -> str:
        """Read one character; ``""`` at end of file."""
        return self.getc(descrp)

    def fgets(self, n: int, descrp: int) -> Optional[str]:
        """Read a line of at most ``n - 1`` characters, keeping its end.

        The line ends after a newline or a carriage return.  Returns
        ``None`` when end of file comes before any character.
        """
        chars: list[str] = []
        ended = False
        for _ in range(max(n - 1, 0)):
            ch = self.getc(descrp)
            if ch == "":
                ended = True
                break
            chars.append(ch)
            if ch in ("\n", "\r"):
                break
        if ended and not chars:
            return None
        return "".join(chars)

    def fputc(self, ch, descrp: int):
        """Write one character and return it."""
        self.putc(descrp, ch)
        return ch

    def fputs(self, text: str, descrp: int) -> None:
        """Write ``text`` up to its first NUL."""
        for ch in text.split("\0", 1)[0]:
            self.putc(descrp, ch)

    def fprintf(self, descrp: int, fmt: str, *args: Any) -> None:
        """Write formatted output to a device."""
        device = self._device(descrp)
        doprnt(fmt, args, device.putc)

    def fscanf(self, descrp: int, fmt: str) -> list:
        """Scan input from a device and return the converted values."""
        self._device(descrp)
        return doscan(fmt, _DeviceSource(self, descrp))

    def printf(self, fmt: str, *args: Any) -> None:
        """Write formatted output to standard output."""
        self.fprintf(self.stdout, fmt, *args)

    def putchar(self, ch):
        """Write one character to standard output and return it."""
        return self.fputc(ch, self.stdout)

    def getchar(self) -> str:
        """Read one character from standard input; ``""`` at end of file."""
        return self.fgetc(self.stdin)


def default_devtab() -> DeviceTable:
    """The standard configuration: a console terminal and a null device."""
    return DeviceTable(
        [
            TtyDevice("CONSOLE", 0, Uart(), CONSOLE_CSR, CONSOLE_IRQ),
            NullDevice("NOTADEV"),
        ]
    )


__all__ = [
    "CONSOLE",
    "NOTADEV",
    "NDEVS",
    "DEVMAXNAME",
    "DeviceError",
    "Device",
    "NullDevice",
    "TtyDevice",
    "DeviceTable",
    "TtyFunc",
    "default_devtab",
]