"""Small models of operating-system mechanisms: locks and atomics, asyncio helpers, page tables and a TLB."""

__version__ = "0.1.0"