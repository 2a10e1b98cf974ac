"""
Persistence adapters.

These modules encapsulate how the case collection is stored/retrieved (a JSON
file per slot, or a key/value table in SQL). Services depend on the
SlotStorage interface rather than touching files or sessions themselves.
"""
