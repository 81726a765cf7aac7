"""PageSim — a two-tier paged memory simulator.

A fixed-size RAM pool and a fixed-size swap pool are both divided into
equal pages.  Processes ask for pages; when RAM runs out the oldest
RAM page is pushed to swap (FIFO) to make room.
"""
