"""
Test suite for su3lattice

Contains:
- tests/unit/ : unit tests for the algebra, the SU(3) sampler and the lattice
"""
