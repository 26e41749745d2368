"""Declarative base shared by the user, post, like and comment models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
