from fastapi import HTTPException, Request
from app.config import settings


def get_owner_id(request: Request) -> str:
    """
    Resolve the acting user from the request.

    Authentication happens upstream; the gateway forwards the verified user id
    in ``settings.owner_header`` and it is trusted as-is.
    """
    owner_id = (request.headers.get(settings.owner_header) or "").strip()
    if not owner_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return owner_id
