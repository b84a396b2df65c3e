"""
# `tonalis`: Pitches, Intervals and Scales of Tonal Music

This is the top-level module of the `tonalis` library. Pitches and intervals are stored as
pairs of staff steps and half steps, so that spelling survives arithmetic:

```python
>>> from tonalis import Pitch, Interval
>>> Pitch("C4") + Interval("m3")
Pitch("Eb4")
```

Scales, key signatures and the `AccidentalCalculator` used to decide which notes need a written
accidental are also exposed here.
"""

from ._impl import *  # noqa: F401, F403
