import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.app_logging import setup_logger
from app.core.errors import AccountError
from app.routes.health import router as health_router
from app.routes.auth import router as auth_router
from app.routes.users import router as users_router
from app.routes.admin import router as admin_router

setup_logger()
logger = logging.getLogger("app.main")

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ],
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AccountError)
def account_error_handler(request: Request, exc: AccountError):
    log = logger.info if exc.is_warning else logger.warning
    log("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(admin_router)
