"""Declarative base shared by every wiki table."""

from advanced_alchemy.base import BigIntBase


class Base(BigIntBase):
    """Integer-keyed base model; ids are assigned by the wiki, not generated UUIDs."""

    __abstract__ = True
