"""kctx - switch between kubectl contexts and swap back to the previous one"""

__version__ = "0.1.0"
