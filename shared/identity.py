from fastapi import Request
from fastapi.responses import JSONResponse

# set by the upstream auth gateway after it has verified the caller's token
USER_ID_HEADER = "X-User-ID"


async def identity_middleware(request: Request, call_next):
    uid = (request.headers.get(USER_ID_HEADER) or "").strip()
    if uid:
        request.state.user = {"sub": uid}
    return await call_next(request)


def current_user_id(request: Request) -> str | None:
    user = getattr(request.state, "user", None)
    if isinstance(user, dict) and user.get("sub"):
        return str(user["sub"])
    return None


def unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})
