"""
Generators — produce page declarations from a resolved parameter policy.

Each generator module exposes pure functions returning ``Declaration``
instances; nothing here reads or writes files.
"""
