"""
Model server records.
"""
from pydantic import BaseModel


class ModelInfo(BaseModel):
    """A model available on the local model server."""
    
    name: str
    size: int = 0
    digest: str = ""
    modified_at: str = ""
