from typing import List, Optional

from pydantic import Field

from userhub.schemas.user import DocumentModel


class Company(DocumentModel):
    """Company as seen from userhub: a name and its employee user ids."""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    employees: List[str] = []
