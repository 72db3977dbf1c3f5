"""Reviews app package.

Tourists rate services and attractions from 1 to 5. Every review write
recomputes the target's ``average_rating`` and ``review_count`` inside the
same transaction, under a lock on the target row.
"""
