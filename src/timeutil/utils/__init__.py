"""
Generic utility functions shared across modules.

Includes clock abstractions, epoch-millisecond conversions and logging setup.
"""
