"""
Base service class.
"""

from abc import ABC

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService(ABC):
    """
    Services hold the business rules for one request. They share the
    request's session with the repositories they create and decide
    themselves when to commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
