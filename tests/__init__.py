"""
Test suite for the virtual-pair bootstrap AMM

Contains:
- tests/unit/          : Unit tests for individual modules and the controller
"""
