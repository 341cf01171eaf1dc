"""Domain exceptions for malformed line-notation input."""

from typing import Optional


class SmilesSyntaxError(ValueError):
    """Raised by the strict parser when line-notation text is malformed."""

    def __init__(self, message: str, smiles: str, position: Optional[int] = None):
        self.smiles = smiles
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in '{smiles}'"
        super().__init__(message)
