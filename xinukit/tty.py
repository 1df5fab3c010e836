"""Serial terminal driver over a simulated 16550-style UART.

The driver keeps three queues: an input queue filled by the receive
interrupt, an output queue filled by ``putc``/``write`` and an echo queue
for characters echoed back to the user.  The transmit interrupt moves
characters from the echo and output queues to the UART.

Input is handled in one of three modes.  In raw mode characters are
queued as they arrive.  In cbreak mode they are echoed and queued one by
one.  In cooked mode a whole line is edited, with erase, line kill and
end-of-file, before any of it can be read.  Flow control (^S/^Q) holds and
releases output.

Where the original driver would block a process on a semaphore, this one
raises :class:`WouldBlock`.
"""

from __future__ import annotations

import enum
from collections import deque

TY_IBUFLEN = 128
TY_OBUFLEN = 64
TY_EBUFLEN = 20
UART_FIFO_SIZE = 16

TY_NEWLINE = "\n"
TY_RETURN = "\r"
TY_BACKSP = "\b"
TY_BLANK = " "
TY_UPARROW = "^"
TY_EOFCH = "\x04"
TY_KILLCH = "\x15"
TY_STOPCH = "\x13"
TY_STRTCH = "\x11"
TY_FULLCH = "\x07"

UART_IER_ERBFI = 0x01
UART_IER_ETBEI = 0x02
UART_IER_ELSI = 0x04

UART_IIR_IRQ = 0x01
UART_IIR_IDMASK = 0x0E
UART_IIR_MSC = 0x00
UART_IIR_THRE = 0x02
UART_IIR_RDA = 0x04
UART_IIR_RLSI = 0x06
UART_IIR_RTO = 0x0C

UART_LSR_DR = 0x01
UART_LSR_THRE = 0x20
UART_LSR_TEMT = 0x40

_LINE_ENDS = (TY_NEWLINE, TY_RETURN)


class InputMode(enum.Enum):
    """How arriving characters are processed."""

    RAW = "R"
    COOKED = "C"
    CBREAK = "K"


class TtyFunc(enum.IntEnum):
    """Control functions accepted by :meth:`Tty.control`."""

    NEXTC = 3
    MODER = 4
    MODEC = 5
    MODEK = 6
    ICHARS = 8
    ECHO = 9
    NOECHO = 10


class WouldBlock(Exception):
    """The operation would have to wait for input or for output space."""


class Uart:
    """A simulated UART: bytes fed in are received, bytes sent are kept."""

    def __init__(self) -> None:
        self._rx: deque[int] = deque()
        self._tx = bytearray()
        self._ier = 0
        self._thre_pending = False

    def feed(self, data) -> None:
        """Make ``data`` (bytes or a latin-1 string) arrive on the line."""
        if isinstance(data, str):
            data = data.encode("latin-1")
        self._rx.extend(data)

    def take_output(self) -> bytes:
        """Return and forget everything transmitted so far."""
        out = bytes(self._tx)
        self._tx.clear()
        return out

    @property
    def ier(self) -> int:
        """Interrupt enable register."""
        return self._ier

    @ier.setter
    def ier(self, value: int) -> None:
        self._ier = value & 0xFF
        if self._ier & UART_IER_ETBEI:
            self._thre_pending = True

    def _read_iir(self) -> int:
        if self._rx and self._ier & UART_IER_ERBFI:
            return UART_IIR_RDA
        if self._ier & UART_IER_ETBEI and self._thre_pending:
            self._thre_pending = False
            return UART_IIR_THRE
        return UART_IIR_IRQ

    def _read_lsr(self) -> int:
        lsr = UART_LSR_THRE | UART_LSR_TEMT
        if self._rx:
            lsr |= UART_LSR_DR
        return lsr

    def _read_buffer(self) -> int:
        return self._rx.popleft() if self._rx else 0

    def _write_buffer(self, byte: int) -> None:
        self._tx.append(byte & 0xFF)
        self._thre_pending = True


def _nonprintable(ch: str) -> bool:
    return ch < TY_BLANK or ch == "\x7f"


class Tty:
    """Terminal line discipline driving one :class:`Uart`."""

    def __init__(self, uart: Uart) -> None:
        self.uart = uart
        self._ibuf: deque[str] = deque()
        self._avail = 0
        self._cursor = 0
        self._obuf: deque[str] = deque()
        self._ebuf: deque[str] = deque(maxlen=TY_EBUFLEN)
        self.mode = InputMode.COOKED
        self.echo = True
        self.echo_erase = True
        self.visual = True
        self.echo_crlf = True
        self.map_cr = True
        self.erase = True
        self.erase_char = TY_BACKSP
        self.honor_eof = True
        self.eof_char = TY_EOFCH
        self.kill = True
        self.kill_char = TY_KILLCH
        self.flow_control = True
        self.held = False
        self.stop_char = TY_STOPCH
        self.start_char = TY_STRTCH
        self.out_crlf = True
        self.full_char = TY_FULLCH
        self.kick_out()

    # Upper half

    def getc(self) -> str:
        """Take one character from the input queue; ``""`` means end of file."""
        if self._avail <= 0:
            raise WouldBlock("no input available")
        ch = self._ibuf.popleft()
        self._avail -= 1
        if self.mode is InputMode.COOKED and self.honor_eof and ch == self.eof_char:
            return ""
        return ch

    def putc(self, ch) -> None:
        """Queue one character for output, sending CR before NEWLINE if set."""
        if isinstance(ch, int):
            ch = chr(ch & 0xFF)
        elif len(ch) != 1:
            raise ValueError("expected a single character")
        if ch == TY_NEWLINE and self.out_crlf:
            self.putc(TY_RETURN)
        if len(self._obuf) >= TY_OBUFLEN:
            self.handle_output()
            if len(self._obuf) >= TY_OBUFLEN:
                raise WouldBlock("output queue is full")
        self._obuf.append(ch)
        self.kick_out()

    def read(self, count: int) -> str:
        """Read up to ``count`` characters; ``""`` means end of file.

        In cooked mode at most one line is returned.  In the other modes
        exactly ``count`` characters are read, or everything available when
        ``count`` is zero.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        if self.mode is not InputMode.COOKED:
            if count == 0:
                count = self._avail
            if count > self._avail:
                raise WouldBlock("not enough input available")
            return "".join(self.getc() for _ in range(count))

        first = self.getc()
        if first == "":
            return ""
        chars = [first]
        ch = first
        while len(chars) < count and ch not in _LINE_ENDS:
            ch = self.getc()
            chars.append(ch)
        return "".join(chars)

    def write(self, data: str) -> None:
        """Queue every character of ``data`` for output."""
        for ch in data:
            self.putc(ch)

    def control(self, func, arg1: int = 0, arg2: int = 0):
        """Perform a control function; see :class:`TtyFunc`.

        NEXTC returns the next input character without taking it, ICHARS
        the number of characters available; the others return ``None``.
        """
        try:
            func = TtyFunc(func)
        except ValueError:
            raise ValueError(f"unknown tty control function {func!r}") from None
        if func is TtyFunc.NEXTC:
            if self._avail <= 0:
                raise WouldBlock("no input available")
            return self._ibuf[0]
        if func is TtyFunc.ICHARS:
            return self._avail
        if func is TtyFunc.MODER:
            self.mode = InputMode.RAW
        elif func is TtyFunc.MODEC:
            self.mode = InputMode.COOKED
        elif func is TtyFunc.MODEK:
            self.mode = InputMode.CBREAK
        elif func is TtyFunc.ECHO:
            self.echo = True
        elif func is TtyFunc.NOECHO:
            self.echo = False
        return None

    # Lower half

    def kick_out(self) -> None:
        """Enable UART interrupts so that a transmit interrupt follows."""
        self.uart.ier = UART_IER_ERBFI | UART_IER_ETBEI | UART_IER_ELSI

    def interrupt(self) -> bool:
        """Service one pending UART interrupt; return False if none was pending."""
        iir = self.uart._read_iir()
        if iir & UART_IIR_IRQ:
            return False
        cause = iir & UART_IIR_IDMASK
        if cause == UART_IIR_RLSI:
            self.uart._read_lsr()
        elif cause in (UART_IIR_RDA, UART_IIR_RTO):
            while self.uart._read_lsr() & UART_LSR_DR:
                self.handle_input()
        elif cause == UART_IIR_THRE:
            self.uart._read_lsr()
            self.handle_output()
        return True

    def handle_output(self) -> None:
        """Move echo then output characters into the UART transmit FIFO."""
        if self.held:
            self.uart._read_lsr()
            return
        if not self._ebuf and not self._obuf:
            self.uart.ier = self.uart.ier & ~UART_IER_ETBEI
            return
        space = UART_FIFO_SIZE
        for queue in (self._ebuf, self._obuf):
            while space > 0 and queue:
                self.uart._write_buffer(ord(queue.popleft()))
                space -= 1

    def handle_input(self) -> None:
        """Process one character arriving from the UART."""
        ch = chr(self.uart._read_buffer())
        avail = max(self._avail, 0)

        if self.mode is InputMode.RAW:
            if avail >= TY_IBUFLEN:
                return
            self._ibuf.append(ch)
            self._avail += 1
            return

        if ch == TY_RETURN and self.map_cr:
            ch = TY_NEWLINE

        if self.flow_control:
            if ch == self.start_char:
                self.held = False
                self.kick_out()
                return
            if ch == self.stop_char:
                self.held = True
                return

        self.held = False

        if self.mode is InputMode.CBREAK:
            if avail >= TY_IBUFLEN:
                self._eputc(self.full_char)
            else:
                self._ibuf.append(ch)
                self._avail += 1
                if self.echo:
                    self._echoch(ch)
            return

        self._cooked_input(ch)

    def _cooked_input(self, ch: str) -> None:
        if ch == self.kill_char and self.kill:
            for _ in range(self._cursor):
                self._ibuf.pop()
            self._cursor = 0
            self._eputc(TY_RETURN)
            self._eputc(TY_NEWLINE)
            return

        if ch == self.erase_char and self.erase:
            if self._cursor > 0:
                self._cursor -= 1
                self._erase1()
            return

        if ch in _LINE_ENDS:
            if self.echo:
                self._echoch(ch)
            self._ibuf.append(ch)
            self._avail += self._cursor + 1
            self._cursor = 0
            return

        if max(self._avail, 0) + self._cursor >= TY_IBUFLEN - 1:
            self._eputc(self.full_char)
            return

        if ch == self.eof_char and self.honor_eof:
            if self.echo:
                self._echoch(ch)
            if self._cursor != 0:
                return
            self._ibuf.append(ch)
            self._avail += 1
            return

        if self.echo:
            self._echoch(ch)
        self._cursor += 1
        self._ibuf.append(ch)

    def _erase1(self) -> None:
        ch = self._ibuf.pop()
        if not self.echo:
            return
        if _nonprintable(ch) and self.visual:
            self._backspace()
        self._backspace()

    def _backspace(self) -> None:
        self._eputc(TY_BACKSP)
        if self.echo_erase:
            self._eputc(TY_BLANK)
            self._eputc(TY_BACKSP)

    def _echoch(self, ch: str) -> None:
        if ch in _LINE_ENDS and self.echo_crlf:
            self._eputc(TY_RETURN)
            self._eputc(TY_NEWLINE)
        elif _nonprintable(ch) and self.visual:
            self._eputc(TY_UPARROW)
            self._eputc(chr((ord(ch) + 0o100) & 0xFF))
        else:
            self._eputc(ch)

    def _eputc(self, ch: str) -> None:
        self._ebuf.append(ch)
        self.kick_out()