"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of Qt or of where snapshots are stored.
It deals with mold records, mixture proportions and snapshot formats.
"""
