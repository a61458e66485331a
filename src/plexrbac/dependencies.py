"""Shared FastAPI dependencies.

Type aliases that routers and main.py import. Kept out of main.py to avoid
circular imports when routers are registered there.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from plexrbac.config import Settings, get_settings
from plexrbac.db.session import get_db

DB = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
