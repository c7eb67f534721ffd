"""Base factory configuration for polyfactory."""

from polyfactory.factories.pydantic_factory import ModelFactory

from src.taskboard.models import new_id, utc_now

__all__ = ["BaseFactory", "new_id", "utc_now"]


class BaseFactory(ModelFactory):
    """Base factory for the backing-agnostic entities.

    Concrete factories pin every field that tests assert on.
    """

    __is_base_factory__ = True
