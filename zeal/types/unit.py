from __future__ import annotations


class UnitType:
    """The value of statements with no natural result (blocks, loops, declarations)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "()"

    def __eq__(self, other):
        return isinstance(other, UnitType)

    def __hash__(self):
        return hash(UnitType)


Unit = UnitType()
