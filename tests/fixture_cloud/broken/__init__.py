"""Namespace exposing an Api but no Service."""

from opencloud.common.api import AbstractApi


class Api(AbstractApi):
    pass
