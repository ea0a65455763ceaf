"""Storage package.

Confines every read/write to the output root (`paths`) and persists generated
images under collision-resistant names (`files`).
"""
