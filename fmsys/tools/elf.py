"""ELF64 little-endian file and program headers."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar

ELF_MAGIC = 0x464C457F
ELF_PROG_LOAD = 1


class ProgramFlag(enum.IntFlag):
    """Permission bits of a program header."""

    EXEC = 1
    WRITE = 2
    READ = 4


class ElfFormatError(ValueError):
    """Data is not a well-formed ELF header."""


_ELF_HEADER = struct.Struct("<I12sHHIQQQIHHHHHH")
_PROGRAM_HEADER = struct.Struct("<IIQQQQQQ")


@dataclass
class ElfHeader:
    """The file header at the start of an ELF executable."""

    SIZE: ClassVar[int] = _ELF_HEADER.size

    magic: int = ELF_MAGIC
    elf: bytes = field(default=bytes(12))
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    def __post_init__(self) -> None:
        self.elf = bytes(self.elf)
        if len(self.elf) != 12:
            raise ElfFormatError("identification bytes must be exactly 12 long")

    @classmethod
    def from_bytes(cls, data: bytes) -> ElfHeader:
        """Parse a header from the start of data; the magic number must match."""
        if len(data) < cls.SIZE:
            raise ElfFormatError(
                f"ELF header needs {cls.SIZE} bytes, got {len(data)}"
            )
        header = cls(*_ELF_HEADER.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfFormatError(f"bad ELF magic 0x{header.magic:08x}")
        return header

    def to_bytes(self) -> bytes:
        """Encode the header."""
        try:
            return _ELF_HEADER.pack(
                self.magic,
                self.elf,
                self.type,
                self.machine,
                self.version,
                self.entry,
                self.phoff,
                self.shoff,
                self.flags,
                self.ehsize,
                self.phentsize,
                self.phnum,
                self.shentsize,
                self.shnum,
                self.shstrndx,
            )
        except struct.error as exc:
            raise ElfFormatError(f"field out of range: {exc}") from exc


@dataclass
class ProgramHeader:
    """One program section header."""

    SIZE: ClassVar[int] = _PROGRAM_HEADER.size

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    @property
    def is_load(self) -> bool:
        """Whether the section is to be loaded into memory."""
        return self.type == ELF_PROG_LOAD

    @property
    def permissions(self) -> ProgramFlag:
        """The section's permission bits."""
        return ProgramFlag(self.flags & (ProgramFlag.EXEC | ProgramFlag.WRITE | ProgramFlag.READ))

    @classmethod
    def from_bytes(cls, data: bytes) -> ProgramHeader:
        """Parse a program header from the start of data."""
        if len(data) < cls.SIZE:
            raise ElfFormatError(
                f"program header needs {cls.SIZE} bytes, got {len(data)}"
            )
        return cls(*_PROGRAM_HEADER.unpack_from(data))

    def to_bytes(self) -> bytes:
        """Encode the program header."""
        try:
            return _PROGRAM_HEADER.pack(
                self.type,
                self.flags,
                self.off,
                self.vaddr,
                self.paddr,
                self.filesz,
                self.memsz,
                self.align,
            )
        except struct.error as exc:
            raise ElfFormatError(f"field out of range: {exc}") from exc