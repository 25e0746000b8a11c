"""Builders for small vmstat/free snapshot logs shared by the test suites."""

from __future__ import annotations

CPU_HEADER_1 = "procs -----------memory---------- ---swap-- -----io---- -system-- ------cpu-----"
CPU_HEADER_2 = " r  b   swpd   free   buff  cache   si   so    bi    bo   in   cs us sy id wa st"
MEM_HEADER = "              total        used        free      shared  buff/cache   available"


def cpu_block(minute: int, rows: list[str], *, headers: bool = True) -> list[str]:
    """A CPU snapshot block: two dates, optional headers, the given rows."""
    out = [
        f"01/01/2024_10:{minute:02d}:00",
        f"Mon Jan 1 10:{minute:02d}:00 -05 2024",
    ]
    if headers:
        out += [CPU_HEADER_1, CPU_HEADER_2]
    return out + rows


def cpu_row(n: int) -> str:
    return f" {n}  0      0 8123{n:02d}  10240 512000    0    0     3     5   40   60  2  1 97  0  0"


def mem_block(minute: int, *, header: bool = True, rows: int = 1) -> list[str]:
    """A memory snapshot block: two dates, optional header, ``rows`` Mem/Swap pairs."""
    out = [
        f"01/01/2024_10:{minute:02d}:00",
        f"Mon Jan 1 10:{minute:02d}:00 -05 2024",
    ]
    if header:
        out.append(MEM_HEADER)
    for i in range(rows):
        out.append(f"Mem:        8000000     20{minute:02d}{i:03d}     4000000       10000     2000000     5800000")
        out.append(f"Swap:       2000000           {minute}{i}     2000000")
    return out
