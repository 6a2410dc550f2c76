from typing import Dict

from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    """
    Data model for a parsed request line, created once per connection.
    """

    method: str
    target: str
    query: Dict[str, str] = Field(default_factory=dict)

    def get_query_param(self, key: str, default=None):
        """
        Return the value of a query parameter, or the default if it is absent.
        """
        return self.query.get(key, default)
