# xinukit

A small, dependency-free library of C-style runtime routines in plain
Python. It covers string and memory helpers, character classification, a
linear congruential generator, quicksort, `printf`/`scanf` formatting, a
serial terminal driver that runs on a simulated UART, and a device table
with stdio-style calls on top.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `xinukit.cstring` provides `atoi`, `atol`, `strlen`, `strcmp`, `strncmp`,
  `strchr`, `strrchr`, `strstr`, `strnlen`, `strncat`, `strncpy`, `memcmp`,
  `memchr`, `memcpy`, `memset` and `bzero`.
  - Strings are `str` objects. Everything after a first `"\0"` is ignored.
  - Searches return an index, or `None` when nothing is found.
  - The memory helpers work on `bytes` and `bytearray`. `memcpy` and
    `memset` change the `bytearray` they are given and also return it.
  - `strncat` and `strncpy` return new strings.
- `xinukit.ctype` provides `CharClass`, an `IntFlag` of classification bits,
  together with `classify` and the predicates `isdigit`, `isupper`,
  `islower`, `isalpha`, `isxdigit`, `isspace`, `ispunct` and `iscntrl`. They
  cover 7-bit ASCII. Any code outside 0..127 has no class.
- `xinukit.rand` provides `Rand`, a 32-bit linear congruential generator.
  - `srand(seed)` sets the state. It is seeded with 1 by default.
  - `rand()` returns a value in `0..RAND_MAX`, where `RAND_MAX` is `0x7FFF`.
- `xinukit.qsort` provides `qsort(items, cmp)`. It is an unstable in-place
  quicksort for any mutable sequence, driven by a three-way comparison
  function.
- `xinukit.printf` provides `doprnt(fmt, args, emit)`, `iter_format(fmt,
  *args)` and `sprintf(fmt, *args)`.
  - Conversions: `%c %s %d %u %o %x %X %b`, plus `%h`/`%H`, which print two
    words in hexadecimal.
  - Modifiers: `-` to left-justify, `0` to fill with zeros, and a width and
    `.precision`, either of which may be `*`.
  - Numbers are treated as 32-bit values.
- `xinukit.scanf` provides `doscan(fmt, source)`, `sscanf(text, fmt)` and
  `StringSource`.
  - Conversions: `%d`, `%o`, `%x`, `%c`, `%s` and `%[set]`, with an optional
    `*`, a width, and `l` or `h`.
  - Converted values are returned as a list.
  - `EOFError` is raised when input ends before any conversion.
- `xinukit.tty` provides `Tty`, `Uart`, `InputMode`, `TtyFunc` and
  `WouldBlock`.
  - Input modes: cooked (line editing with erase, line kill and end of
    file), cbreak and raw.
  - Echo and ^S/^Q flow control.
  - Interrupt handling through `Tty.interrupt()`, `Tty.handle_input()` and
    `Tty.handle_output()`.
- `xinukit.devices` provides `DeviceTable`, `Device`, `NullDevice`,
  `TtyDevice`, `DeviceError` and `default_devtab()`.
  - `default_devtab()` returns a table with `CONSOLE` (descriptor 0, a
    terminal) and `NOTADEV` (descriptor 1, a null device).
  - `DeviceTable` offers `close`, `control`, `getc`, `putc`, `read`, `write`,
    `fgetc`, `fgets`, `fputc`, `fputs`, `fprintf`, `fscanf`, `printf`,
    `putchar` and `getchar`.

## Examples

Formatting:

```python
from xinukit.printf import sprintf

sprintf("%05d|%-4s|%x", -42, "ab", 255)   # '-0042|ab  |ff'
```

Scanning:

```python
from xinukit.scanf import sscanf

sscanf("12 abc", "%d %s")                 # [12, 'abc']
```

String routines and the generator:

```python
from xinukit.cstring import atoi, strcmp
from xinukit.rand import Rand

atoi("  -123xyz")      # -123
strcmp("abc", "abd")   # -1
Rand(1).rand()         # 16838
```

A terminal on a simulated UART. Call `interrupt()` until it returns
`False` to process received characters and to move echo and output into
the UART:

```python
from xinukit.tty import Tty, Uart

uart = Uart()
tty = Tty(uart)
uart.feed(b"hi\r")
while tty.interrupt():
    pass
tty.read(10)           # 'hi\n'  (carriage return mapped to newline)
uart.take_output()     # b'hi\r\n'  (the echo)
```

Through the device table:

```python
from xinukit.devices import CONSOLE, default_devtab

devtab = default_devtab()
devtab.printf("value=%d\n", 7)
console = devtab[CONSOLE]
while console.tty.interrupt():
    pass
console.uart.take_output()   # b'value=7\r\n'
```

## What it does not do

- There is no command-line program.
- Nothing talks to a real serial port: all terminal I/O goes through the
  in-memory `Uart`.
- Nothing waits. Where a read would need input that has not arrived yet,
  or a write would need room in a full output queue, the terminal raises
  `WouldBlock` instead of waiting.