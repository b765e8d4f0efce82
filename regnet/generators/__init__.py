"""Sample request generators."""

from regnet.generators.properties import PropertyGenerator, PropertyRequestParams
from regnet.generators.users import UserGenerator, UserRequestParams

__all__ = ["PropertyGenerator", "PropertyRequestParams", "UserGenerator", "UserRequestParams"]
