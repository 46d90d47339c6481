# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel


class Envelope(BaseModel):
    """Base for ``{message, data}`` style responses."""

    message: str
