from __future__ import annotations


class InvalidRange(ValueError):
    pass
