# fmsys

A small multi-threaded file management system: a TCP server that works on the
files under a root directory, and a client (interactive or from Python) that
sends it commands. Alongside them come a few Unix-style text tools and helpers
for RISC-V paging arithmetic and ELF headers.

Only the standard library is needed.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The file server

```
fmsys-server [--host HOST] [--port PORT] [--root DIR] [--log FILE]
```

By default the server listens on `0.0.0.0:8000`, works on the files in the
current directory and logs to `ROOT/log.txt`. Each connected client is served
in its own thread; at most ten clients are served at once, and further
connections wait until a slot is free. Ctrl-C stops the server.

Operations a client can ask for:

1. Reading a file
2. Writing (appends text to the file, creating it if needed)
3. Deleting a file
4. Renaming a file
5. Copying (the client appends the received content to a local file)
6. Metadata (size, permission bits, access, modification and status-change times)
7. Compression with zlib, into `compressed_<name>`
8. Decompression into `decompressed_<name>`; the output may be at most four
   times the size of the compressed file
9. Exit

File access goes through a reader-writer lock kept per file name
(`fmsys.locks.LockRegistry` and `ReadWriteLock`). Many clients may read, copy
or inspect a file at once; writing, deleting and renaming need it to
themselves. Every operation, successful or not, is appended to the log by
`fmsys.oplog.OperationLogger`. A file named `log.txt` may not be read,
written, deleted, renamed, copied or inspected by clients.

The server can also be run from Python:

```python
from fmsys.server import FileServer

with FileServer("127.0.0.1", 0, root="data") as server:
    print(server.address)
    server.serve_forever()   # until server.close() is called from another thread
```

## The client

```
fmsys-client [--host HOST] [--port PORT] [--timeout SECONDS]
```

The client connects to `127.0.0.1:8000` by default, shows the menu above and
asks for file names and text as each operation needs them.

From Python, `fmsys.client.FileClient` offers the same operations:

```python
from fmsys.client import FileClient

with FileClient("127.0.0.1", 8000, 7) as client:
    client.write("notes.txt", "hello")
    print(client.read("notes.txt"))
    print(client.metadata("notes.txt"))
    client.copy("notes.txt", "notes-copy.txt")   # returns bytes copied
    client.rename("notes.txt", "renamed.txt")
    print(client.compress("renamed.txt"))         # name of the compressed file
```

A refused request raises `fmsys.operations.AccessDenied`; a failed one raises
`fmsys.operations.FileOperationError`. The server and client speak their own
framed protocol (`fmsys.protocol`) and are meant to be used together.

## Text tools

```
fmsys-grep PATTERN [FILE ...]
fmsys-wc [FILE ...]
```

`fmsys-grep` prints the lines that match a simple regular expression
understanding only `^`, `.`, `*` and `$`. Only newline-terminated lines are
considered, and reading stops at a line longer than 1023 bytes. `fmsys-wc`
prints the line, word and byte counts of each file followed by its name. Both
read standard input when no file is given.

As library functions:

```python
from fmsys.tools.grep import match, grep_lines
from fmsys.tools.wc import count

match("^ab*c$", "abbbc")                       # True
list(grep_lines("err", ["ok\n", "error\n"]))   # ["error\n"]
count(b"two words\n")                           # Counts(lines=1, words=2, chars=10)
```

## Other helpers

- `fmsys.tools.fmt.format_message` formats text like a minimal `printf`,
  handling `%d`, `%u`, `%x` (with `l`/`ll`), `%p`, `%s` and `%%`; integers are
  shown as 32-bit values and unknown conversions are echoed. `fmsys.tools.fmt.atoi`
  reads the leading decimal digits of a string.
- `fmsys.tools.prng.ParkMiller` is the Park–Miller "minimal standard" random
  number generator; call `next()` or iterate over it.
- `fmsys.tools.shparse.parse_command` parses a shell command line with pipes,
  `;` lists, `&` background jobs, parenthesised blocks and `<`, `>`, `>>`
  redirections into a tree of `ExecCommand`, `RedirCommand`, `PipeCommand`,
  `ListCommand` and `BackCommand`. It raises `ShellSyntaxError` on input it
  cannot parse.
- `fmsys.tools.riscv` does Sv39 page-table arithmetic (`pg_round_up`,
  `pg_round_down`, `pa_to_pte`, `pte_to_pa`, `pte_flags`, `px`, `make_satp`)
  and computes memory-layout addresses (`kstack`, `plic_senable`,
  `plic_spriority`, `plic_sclaim`).
- `fmsys.tools.elf` reads and writes 64-bit little-endian ELF file headers and
  program headers with `ElfHeader` and `ProgramHeader`.

## What it does not do

The shell parser only builds command trees; the package has no shell that runs
them. The RISC-V and ELF helpers compute addresses and encode headers; nothing
here loads or runs programs.