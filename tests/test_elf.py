import pytest

from fmsys.tools.elf import (
    ELF_MAGIC,
    ELF_PROG_LOAD,
    ElfFormatError,
    ElfHeader,
    ProgramFlag,
    ProgramHeader,
)


def _sample_header():
    return ElfHeader(
        elf=bytes(range(12)),
        type=2,
        machine=243,
        version=1,
        entry=0x1000,
        phoff=ElfHeader.SIZE,
        shoff=0x2000,
        flags=5,
        ehsize=ElfHeader.SIZE,
        phentsize=ProgramHeader.SIZE,
        phnum=3,
        shentsize=64,
        shnum=7,
        shstrndx=6,
    )


def test_magic_bytes():
    assert ElfHeader().to_bytes()[:4] == b"\x7fELF"
    assert ElfHeader().magic == ELF_MAGIC


def test_header_sizes():
    assert ElfHeader.SIZE == 64
    assert ProgramHeader.SIZE == 56
    assert len(_sample_header().to_bytes()) == ElfHeader.SIZE


def test_header_round_trip():
    header = _sample_header()
    assert ElfHeader.from_bytes(header.to_bytes()) == header


def test_header_ignores_trailing_data():
    header = _sample_header()
    assert ElfHeader.from_bytes(header.to_bytes() + b"rest") == header


def test_bad_magic_rejected():
    data = bytearray(_sample_header().to_bytes())
    data[0] = 0
    with pytest.raises(ElfFormatError, match="magic"):
        ElfHeader.from_bytes(bytes(data))


def test_short_header_rejected():
    with pytest.raises(ElfFormatError):
        ElfHeader.from_bytes(_sample_header().to_bytes()[:-1])


def test_identification_length_checked():
    with pytest.raises(ElfFormatError):
        ElfHeader(elf=b"short")


def test_out_of_range_field_rejected():
    with pytest.raises(ElfFormatError):
        ElfHeader(type=1 << 16).to_bytes()


def test_program_header_round_trip():
    ph = ProgramHeader(
        type=ELF_PROG_LOAD,
        flags=ProgramFlag.READ | ProgramFlag.EXEC,
        off=0x1000,
        vaddr=0x0,
        paddr=0x0,
        filesz=0x800,
        memsz=0x900,
        align=0x1000,
    )
    assert ProgramHeader.from_bytes(ph.to_bytes()) == ph
    assert len(ph.to_bytes()) == ProgramHeader.SIZE


def test_program_header_load_and_permissions():
    ph = ProgramHeader(type=ELF_PROG_LOAD, flags=ProgramFlag.READ | ProgramFlag.WRITE)
    assert ph.is_load
    assert ph.permissions == ProgramFlag.READ | ProgramFlag.WRITE
    assert not ProgramHeader(type=ELF_PROG_LOAD + 1).is_load


def test_program_flag_values():
    for flag, value in ((ProgramFlag.EXEC, 1), (ProgramFlag.WRITE, 2), (ProgramFlag.READ, 4)):
        encoded = ProgramHeader(type=ELF_PROG_LOAD, flags=flag).to_bytes()
        assert encoded[4:8] == value.to_bytes(4, "little")
    raw = bytearray(ProgramHeader.SIZE)
    raw[0:4] = (1).to_bytes(4, "little")
    raw[4:8] = (2).to_bytes(4, "little")
    parsed = ProgramHeader.from_bytes(bytes(raw))
    assert parsed.is_load
    assert parsed.permissions == ProgramFlag.WRITE


def test_short_program_header_rejected():
    with pytest.raises(ElfFormatError):
        ProgramHeader.from_bytes(bytes(ProgramHeader.SIZE - 1))