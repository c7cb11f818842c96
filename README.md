# riotty

Building blocks for a terminal emulator, in plain Python with no
dependencies outside the standard library.

## What is in it

- **Pseudoterminals** (`riotty.pty`): `create_pty(shell, columns, rows)`
  starts a shell on a new pseudoterminal and returns a `Pty`. The main side
  is non-blocking: `Pty.read(size)` raises `BlockingIOError` when nothing is
  ready, `Pty.write(data)` returns the number of bytes written. Resize with
  `Pty.set_winsize(WinsizeBuilder(rows=..., cols=..., width=..., height=...))`.
  `Pty.register`, `reregister` and `deregister` attach the terminal and a
  signal pipe to a `selectors` selector; `Pty.next_child_event()` returns
  `ChildEvent.EXITED` once a `SIGCHLD` has arrived and the child has exited.
  `Pty.close()` (also used by `with`) sends `SIGHUP` to the child and closes
  the descriptors. Further helpers: `create_termp(utf8)` gives the terminal
  attributes applied to the child's terminal, `terminfo_exists(name)` looks
  for a terminfo entry in the usual directories (honouring `TERMINFO`,
  `TERMINFO_DIRS` and `PREFIX`), `command_per_pid(pid)` asks `ps` for a
  process's command name, and `tty_ptsname(fd)` names a terminal device.
- **Non-blocking line reading** (`riotty.stdin_channel`):
  `spawn_stdin_channel(stream)` reads lines on a background thread and puts
  them on a `queue.Queue`, followed by `None` at end of stream.
- **Cells** (`riotty.sugar`): `Sugar` is one character with foreground and
  background colours and an optional `SugarStyle` (italic, bold,
  bold-italic); `SugarloafStyle` holds a line's screen position, bounds and
  text scale; `empty_sugar_pile()` returns `[[]]`.
- **Layout** (`riotty.layout`): `select_font(sugar, coverage)` picks a
  `FontId` from the regular, symbol, emoji and unicode fonts in that order,
  swapping the regular font for its bold or italic variant when styled.
  `StackLayout.stack(stack, style)` lays out one line, returning its
  `TextRun`s, recording the section in `StackLayout.sections` and adding one
  background `Rect` per character; `take_rects()` hands over the rectangles
  and resets the line cursor, `pile_rect(...)` replaces them and
  `rescale(scale)` changes the scale.
- **Rendering data** (`riotty.geometry`, `riotty.glyphs`): `Rect.to_bytes()`
  and `Uniforms.to_bytes()` pack float32 layouts; `orthographic_projection`,
  `create_vertices_rect`, `batch_instances` (slices of at most 10,000),
  `padded_width` and `pad_rows` (256-byte row alignment); `Region` with
  `contains(x, y)`; `GlyphQueue` holding fonts and queued sections; and
  `next_cache_dimensions` for growing a glyph cache texture.
- **Frame counter** (`riotty.counter`): `Counter.tick()` returns how many
  ticks fell within the last second.

Pseudoterminal support needs a POSIX system (Linux or macOS).

## What it does not do

There is no window, no GPU drawing, no font loading and no escape-sequence
parsing. The layout and geometry modules compute the data a renderer would
draw; font coverage and font cell sizes have to be supplied by the caller.

## Installing

```
pip install .
```

## Commands

Start a shell on a pseudoterminal, type some input into it and print every
byte it writes back:

```
riotty
riotty --shell sh --columns 120 --rows 40 --timeout 2 'echo hi\n'
```

Without input arguments it types `1`, `2`, `ls` and `echo 1`; `\n` in an
argument stands for Enter. Without `--timeout` it runs until the shell's
output ends.

Read standard input on a background thread and poll it, printing
`Received: ...` or `Channel empty`, and exiting with `Channel disconnected`
at end of input:

```
riotty-stdin --interval 0.5
```

## Library use

```python
from riotty.pty import create_pty, WinsizeBuilder

with create_pty("bash", 80, 25) as pty:
    pty.write(b"echo hello\n")
    pty.set_winsize(WinsizeBuilder(rows=40, cols=120))
```

## Tests

```
pip install .[test]
pytest
```