"""RISC-V Sv39 paging arithmetic and the physical memory layout of the machine."""

from __future__ import annotations

_MASK64 = 0xFFFFFFFFFFFFFFFF

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

SATP_SV39 = 8 << 60

MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1
MIE_STIE = 1 << 5

UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1

PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000

KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


def pg_round_up(size: int) -> int:
    """Round size up to a multiple of the page size."""
    return (size + PGSIZE - 1) & ~(PGSIZE - 1) & _MASK64


def pg_round_down(addr: int) -> int:
    """Round addr down to a multiple of the page size."""
    return addr & ~(PGSIZE - 1) & _MASK64


def pa_to_pte(pa: int) -> int:
    """Shift a physical address into the position it takes in a PTE."""
    return ((pa & _MASK64) >> 12) << 10


def pte_to_pa(pte: int) -> int:
    """Extract the physical address a PTE points at."""
    return ((pte >> 10) << 12) & _MASK64


def pte_flags(pte: int) -> int:
    """Return the low ten flag bits of a PTE."""
    return pte & 0x3FF


def _pxshift(level: int) -> int:
    return PGSHIFT + 9 * level


def px(level: int, va: int) -> int:
    """Extract the 9-bit page-table index for the given level of a virtual address."""
    return ((va & _MASK64) >> _pxshift(level)) & PXMASK


def make_satp(pagetable: int) -> int:
    """Build the satp value selecting Sv39 with the given root page table."""
    return SATP_SV39 | ((pagetable & _MASK64) >> 12)


def kstack(index: int) -> int:
    """Address of the kernel stack of process slot index, below a guard page."""
    return TRAMPOLINE - (index + 1) * 2 * PGSIZE


def plic_senable(hart: int) -> int:
    """Address of the supervisor interrupt-enable register of a hart."""
    return PLIC + 0x2080 + hart * 0x100


def plic_spriority(hart: int) -> int:
    """Address of the supervisor priority-threshold register of a hart."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    """Address of the supervisor claim register of a hart."""
    return PLIC + 0x201004 + hart * 0x2000